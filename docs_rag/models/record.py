from __future__ import annotations
from pydantic import BaseModel, Field, field_validator
from typing import List


def make_record_id(source: str, index: int) -> str:
    return f"{source}#chunk-{index}"


class Record(BaseModel):
    """
    One retrievable passage.
    - id: unique within a store (by convention `<source>#chunk-<i>`)
    - source: label of the document the passage came from
    - embedding: fixed-dimension vector for the passage
    - content: the passage text itself
    """
    id: str
    source: str
    embedding: List[float] = Field(min_length=1)
    content: str

    @field_validator("embedding", mode="before")
    @classmethod
    def validate_embedding(cls, v):
        """Accept any sequence (tuples, numpy arrays) and store plain floats."""
        if hasattr(v, "tolist"):
            v = v.tolist()
        return [float(x) for x in v]


class ScoredRecord(Record):
    """A Record plus its similarity to one query. Produced by search only."""
    score: float
