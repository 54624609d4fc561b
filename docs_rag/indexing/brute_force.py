from __future__ import annotations
from typing import List, Sequence, Tuple
import logging
import math
import numpy as np

from docs_rag.core.errors import DimensionMismatchError
from .base import Index

logger = logging.getLogger(__name__)

# Score given to a zero-norm vector: ranks below every real cosine value.
EXCLUDED = float("-inf")


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    dot(a, b) / (|a| * |b|), clipped to [-1, 1].
    Returns EXCLUDED when either vector has zero norm.
    """
    va = np.asarray(a, dtype=float)
    vb = np.asarray(b, dtype=float)
    if va.shape != vb.shape or va.ndim != 1 or va.size == 0:
        raise DimensionMismatchError(va.size, vb.size, what="vector")
    na = float(np.linalg.norm(va))
    nb = float(np.linalg.norm(vb))
    if na == 0.0 or nb == 0.0:
        return EXCLUDED
    s = float(va @ vb) / (na * nb)
    return max(-1.0, min(1.0, s))


class BruteForceIndex(Index):
    """
    Exact cosine similarity over every row.
    Build  : O(ND)   (normalization)
    Search : O(ND)   (one matrix-vector product)
    Space  : O(ND)

    Zero-norm rows (and zero-norm queries) never appear in results.
    Equal scores are ordered by row index, i.e. insertion order.
    """

    def __init__(self, embeddings: List[Sequence[float]]) -> None:
        self.size = len(embeddings)
        self._dim = len(embeddings[0]) if embeddings else 0
        for i, e in enumerate(embeddings):
            if len(e) != self._dim:
                raise DimensionMismatchError(self._dim, len(e), what=f"row {i}")
        mat = np.asarray(embeddings, dtype=float).reshape(self.size, self._dim)
        norms = np.linalg.norm(mat, axis=1)
        self._valid = norms > 0.0
        if not self._valid.all():
            logger.warning(f"{int((~self._valid).sum())} zero-norm rows excluded from ranking")
        # store normalized vectors so cosine == dot
        safe = np.where(self._valid, norms, 1.0)
        self._vecs = mat / safe[:, None]

    @property
    def dim(self) -> int:
        return self._dim

    def search(self, query: np.ndarray, k: int) -> List[Tuple[int, float]]:
        if k <= 0 or self.size == 0:
            return []
        q = np.asarray(query, dtype=float)
        if q.ndim != 1 or len(q) != self._dim:
            raise DimensionMismatchError(self._dim, q.size)

        qn = float(np.linalg.norm(q))
        if qn == 0.0 or not math.isfinite(qn):
            logger.warning("query vector has zero or non-finite norm; nothing to rank")
            return []

        scores = np.clip(self._vecs @ (q / qn), -1.0, 1.0)
        candidates = [(int(i), float(scores[i])) for i in np.flatnonzero(self._valid)]

        # explicit tie-break on insertion position, not left to sort stability
        candidates.sort(key=lambda t: (-t[1], t[0]))
        return candidates[:min(k, len(candidates))]
