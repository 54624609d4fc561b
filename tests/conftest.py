"""
Shared fixtures: a fresh record store and in-process fake collaborators.
No test talks to a real embedding or generation service.
"""
from __future__ import annotations
import asyncio
import json
from typing import Dict, List, Sequence

import pytest

from docs_rag.core.errors import CollaboratorUnavailableError
from docs_rag.models.record import Record
from docs_rag.repositories.memory.record_repo import RecordRepo
from docs_rag.services.corpus_service import CorpusService
from docs_rag.services.grounding import GroundingGate
from docs_rag.services.retrieval_service import RetrievalService
from docs_rag.services.ask_service import AskService


class FakeEmbedder:
    """Looks texts up in a table; unknown texts get `default`."""

    def __init__(self, table: Dict[str, List[float]] | None = None, default: List[float] | None = None,
                 fail: bool = False) -> None:
        self.table = table or {}
        self.default = default or [0.0, 0.0, 1.0]
        self.fail = fail
        self.calls: List[List[str]] = []

    async def embed_texts(self, texts: Sequence[str], kind: str = "document") -> List[List[float]]:
        self.calls.append(list(texts))
        if self.fail:
            raise CollaboratorUnavailableError("fake embeddings", "down")
        return [list(self.table.get(t, self.default)) for t in texts]


class FakeGenerator:
    """Returns a canned payload and records every call."""

    def __init__(self, payload: str = "", fail: bool = False) -> None:
        self.payload = payload
        self.fail = fail
        self.calls: List[tuple] = []

    async def generate(self, instruction_frame: str, evidence_block: str, question: str) -> str:
        self.calls.append((instruction_frame, evidence_block, question))
        if self.fail:
            raise CollaboratorUnavailableError("fake chat", "down")
        return self.payload


def make_record(rid: str, embedding: List[float], content: str = "", source: str = "manual.pdf") -> Record:
    return Record(id=rid, source=source, embedding=embedding, content=content or rid)


def json_payload(answer: str, citations: List[str]) -> str:
    return json.dumps({"answer": answer, "citations": citations})


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def repo() -> RecordRepo:
    return RecordRepo()


@pytest.fixture
def ab_repo(repo) -> RecordRepo:
    """The two-record store: A along x, B along y."""
    repo.append([
        make_record("A", [1.0, 0.0, 0.0], "alpha"),
        make_record("B", [0.0, 1.0, 0.0], "beta"),
    ])
    return repo


@pytest.fixture
def make_ask_service():
    def _make(repo: RecordRepo, embedder: FakeEmbedder, generator: FakeGenerator,
              threshold: float = 0.25, top_k: int = 5) -> AskService:
        return AskService(
            retrieval=RetrievalService(repo),
            embedder=embedder,
            generator=generator,
            gate=GroundingGate(threshold),
            corpus=CorpusService(paths=[]),
            top_k=top_k,
        )
    return _make
