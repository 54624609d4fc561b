from __future__ import annotations
from typing import Optional, Sequence
import logging

from docs_rag.core.config import settings
from docs_rag.models.answer import AskResult
from docs_rag.models.record import ScoredRecord

logger = logging.getLogger(__name__)

REFUSAL_ANSWER = (
    "I don't know based on the provided documentation "
    "(no sufficiently relevant context was found)."
)


def refusal() -> AskResult:
    return AskResult(answer=REFUSAL_ANSWER, citations=[])


class GroundingGate:
    """Hard gate: no generation unless the best match clears the threshold."""

    def __init__(self, min_similarity: Optional[float] = None) -> None:
        self.min_similarity = settings.RAG_MIN_SIMILARITY if min_similarity is None else min_similarity

    def should_answer(self, results: Sequence[ScoredRecord]) -> bool:
        if not results:
            logger.info("grounding gate: no retrieved evidence")
            return False
        best = results[0].score
        if best < self.min_similarity:
            logger.info(f"grounding gate: best score {best:.4f} < {self.min_similarity:.4f}")
            return False
        return True
