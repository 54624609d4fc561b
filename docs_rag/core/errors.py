"""
Failure taxonomy for the retrieval-and-grounding pipeline.

Only these cross the public boundary. Zero-norm vectors, weak evidence,
malformed model output and unknown citations are handled as normal results.
"""

from __future__ import annotations


class RagError(Exception):
    """Base class; `message` is safe to show to a caller."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DimensionMismatchError(RagError, ValueError):
    def __init__(self, expected: int, actual: int, what: str = "query") -> None:
        super().__init__(f"{what} dim {actual} != index dim {expected}")
        self.expected = expected
        self.actual = actual


class InvalidQuestionError(RagError, ValueError):
    pass


class IngestionError(RagError):
    pass


class CollaboratorUnavailableError(RagError):
    """An embedding or generation service call failed."""

    def __init__(self, service: str, message: str) -> None:
        super().__init__(f"{service} unavailable: {message}")
        self.service = service


class DuplicateRecordError(RagError, ValueError):
    def __init__(self, record_id: str) -> None:
        super().__init__(f"record id {record_id!r} already in the store; clear or replace to re-ingest")
        self.record_id = record_id
