from __future__ import annotations
from functools import lru_cache

from docs_rag.repositories.memory.record_repo import RecordRepo
from docs_rag.services.ask_service import AskService
from docs_rag.services.corpus_service import CorpusService
from docs_rag.services.ingestion_service import IngestionService


# Overridden in tests via app.dependency_overrides.
@lru_cache
def get_ask_service() -> AskService:
    return AskService()


@lru_cache
def get_ingestion_service() -> IngestionService:
    return IngestionService()


def get_corpus_service() -> CorpusService:
    return CorpusService.instance()


def get_record_repo() -> RecordRepo:
    return RecordRepo.instance()
