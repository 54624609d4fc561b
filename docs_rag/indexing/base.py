from __future__ import annotations
from typing import Protocol, List, Tuple
import numpy as np


class Index(Protocol):
    """
    Interface for vector indexes over the record store.
    `search(query, k)` returns top-k (row_index, score) pairs, best first,
    where row_index is the record's insertion position.
    """
    def search(self, query: np.ndarray, k: int) -> List[Tuple[int, float]]:
        ...
