from __future__ import annotations
from typing import List, Optional, Sequence
import logging
import threading
import numpy as np

from docs_rag.models.record import Record, ScoredRecord
from docs_rag.repositories.memory.record_repo import RecordRepo
from docs_rag.indexing.brute_force import BruteForceIndex

logger = logging.getLogger(__name__)


class RetrievalService:
    """
    Scores every record in the store against a query vector and returns the
    top-k as ScoredRecord copies. The normalized index is rebuilt only when
    the store's version changes.
    """

    def __init__(self, records: Optional[RecordRepo] = None) -> None:
        self.records = records or RecordRepo.instance()
        self._build_lock = threading.Lock()
        self._version: Optional[int] = None
        self._rows: List[Record] = []
        self._index: Optional[BruteForceIndex] = None

    def _current_index(self) -> tuple[List[Record], BruteForceIndex]:
        with self._build_lock:
            if self._index is None or self._version != self.records.version:
                version, rows = self.records.snapshot()
                self._index = BruteForceIndex([r.embedding for r in rows])
                self._rows = rows
                self._version = version
                logger.debug(f"built index over {len(rows)} records (store version {version})")
            return self._rows, self._index

    def search(self, query_embedding: Sequence[float], k: int = 5) -> List[ScoredRecord]:
        if k <= 0:
            return []
        rows, idx = self._current_index()
        if not rows:
            return []

        hits = idx.search(np.asarray(query_embedding, dtype=float), k)

        results = [
            ScoredRecord(**rows[row_idx].model_dump(), score=score)
            for row_idx, score in hits
        ]
        logger.debug("search scores: " + ", ".join(f"{r.id}={r.score:.4f}" for r in results))
        return results
