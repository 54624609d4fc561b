from __future__ import annotations
from typing import Iterable, List, Optional, Set, Tuple
from copy import deepcopy
import logging

from docs_rag.models.record import Record
from docs_rag.concurrency.read_write_lock import ReadWriteLock
from docs_rag.core.errors import DimensionMismatchError, DuplicateRecordError

logger = logging.getLogger(__name__)


class RecordRepo:
    """
    In-memory, append-only record store for the whole process.
      - insertion order is preserved (and is the search tie-break)
      - every record shares one embedding dimension
      - record ids are unique across the store
      - 'version' increments on any write so search can reuse a built index
    No partial update or delete: re-ingest by clear() + append(), or replace().
    """
    _singleton: "RecordRepo | None" = None

    def __init__(self) -> None:
        self._records: List[Record] = []
        self._ids: Set[str] = set()
        self._dim: Optional[int] = None
        self._lock = ReadWriteLock()
        self.version = 0

    @classmethod
    def instance(cls) -> "RecordRepo":
        if not cls._singleton:
            cls._singleton = cls()
        return cls._singleton

    # --------------- helpers ---------------
    def _check_batch(self, records: List[Record], current_dim: Optional[int], existing: Set[str]) -> Optional[int]:
        dim = current_dim
        ids = set(existing)
        for r in records:
            if dim is None:
                dim = len(r.embedding)
            elif len(r.embedding) != dim:
                raise DimensionMismatchError(dim, len(r.embedding), what=f"record {r.id!r}")
            if r.id in ids:
                raise DuplicateRecordError(r.id)
            ids.add(r.id)
        return dim

    # --------------- writes ---------------
    def append(self, records: Iterable[Record]) -> int:
        batch = [deepcopy(r) for r in records]
        if not batch:
            return 0
        with self._lock.write_lock():
            self._dim = self._check_batch(batch, self._dim, self._ids)
            self._records.extend(batch)
            self._ids.update(r.id for r in batch)
            self.version += 1
        logger.debug(f"appended {len(batch)} records (store size {len(self._records)})")
        return len(batch)

    def clear(self) -> None:
        with self._lock.write_lock():
            self._records = []
            self._ids = set()
            self._dim = None
            self.version += 1

    def replace(self, records: Iterable[Record]) -> int:
        """clear() + append() as one step: readers see the old corpus or the new one."""
        batch = [deepcopy(r) for r in records]
        dim = self._check_batch(batch, None, set())
        with self._lock.write_lock():
            self._records = batch
            self._ids = {r.id for r in batch}
            self._dim = dim
            self.version += 1
        return len(batch)

    # --------------- reads ---------------
    def count(self) -> int:
        with self._lock.read_lock():
            return len(self._records)

    def has(self, record_id: str) -> bool:
        with self._lock.read_lock():
            return record_id in self._ids

    def snapshot(self) -> Tuple[int, List[Record]]:
        """(version, copies of all records in insertion order)."""
        with self._lock.read_lock():
            return self.version, deepcopy(self._records)
