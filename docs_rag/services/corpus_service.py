from __future__ import annotations
from typing import List, Optional
import logging

from docs_rag.core.config import settings
from docs_rag.concurrency.single_flight import InitState, SingleFlight
from docs_rag.services.ingestion_service import IngestionService

logger = logging.getLogger(__name__)


class CorpusService:
    """
    Lazily loads the configured corpus exactly once per process.
    The first query triggers ingestion; concurrent queries wait on it.
    """

    _singleton: "CorpusService | None" = None

    def __init__(self, ingestion: Optional[IngestionService] = None, paths: Optional[List[str]] = None) -> None:
        self._ingestion = ingestion
        self.paths = list(settings.CORPUS_PATHS if paths is None else paths)
        self._flight = SingleFlight(self._load, name="corpus")

    @classmethod
    def instance(cls) -> "CorpusService":
        if not cls._singleton:
            cls._singleton = cls()
        return cls._singleton

    @property
    def ingestion(self) -> IngestionService:
        if self._ingestion is None:
            self._ingestion = IngestionService()
        return self._ingestion

    @property
    def state(self) -> InitState:
        return self._flight.state

    async def _load(self) -> None:
        if not self.paths:
            logger.info("no CORPUS_PATHS configured; serving whatever has been ingested")
            return
        # replace: clear + append as one step, never a half-ingested corpus
        res = await self.ingestion.ingest_files(self.paths, replace=True)
        logger.info(f"corpus ready: {res.chunk_count} chunks from {len(self.paths)} file(s)")

    async def ensure_ready(self) -> None:
        await self._flight.ensure()
