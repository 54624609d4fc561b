from __future__ import annotations
from typing import Any, Dict, List, Sequence
import json
import logging
import re

from docs_rag.models.answer import (
    AskResult,
    Citation,
    FallbackOutput,
    ParsedOutput,
    SynthesizerOutput,
)
from docs_rag.models.record import ScoredRecord
from docs_rag.prompts.grounded_answer import source_label

logger = logging.getLogger(__name__)

# ```json ... ``` around the whole payload
_FENCED = re.compile(r"^```[A-Za-z0-9_-]*\s*\n(.*)\n\s*```$", re.DOTALL)


def _unfence(text: str) -> str:
    m = _FENCED.match(text)
    return m.group(1) if m else text


def parse_synthesizer_output(raw: str) -> SynthesizerOutput:
    """
    Decide once whether the model returned {"answer": str, "citations": [str]}.
    Anything else (invalid JSON, non-object, missing/non-string answer) becomes
    FallbackOutput carrying the trimmed raw text.
    """
    text = (raw or "").strip()
    try:
        data: Any = json.loads(_unfence(text))
    except ValueError:
        logger.warning("synthesizer output is not JSON; using raw text as the answer")
        return FallbackOutput(raw_text=text)

    if not isinstance(data, dict) or not isinstance(data.get("answer"), str):
        logger.warning("synthesizer output has no string 'answer'; using raw text as the answer")
        return FallbackOutput(raw_text=text)

    claimed = data.get("citations")
    citations = [c for c in claimed if isinstance(c, str)] if isinstance(claimed, list) else []
    return ParsedOutput(answer=data["answer"], citations=citations)


def reconcile_citations(claimed: Sequence[str], retrieved: Sequence[ScoredRecord]) -> List[Citation]:
    """
    Keep only claimed ids that were actually given to the model, in claim order,
    each once, scored with the retrieval-time score. A claim may use the raw id
    or the escaped label the prompt showed; either maps back to the raw id.
    """
    by_id: Dict[str, Citation] = {}
    for r in retrieved:
        # retrieved is best-first, so the first occurrence of an id wins
        by_id.setdefault(r.id, Citation(id=r.id, score=r.score))
    for r in retrieved:
        by_id.setdefault(source_label(r.id), by_id[r.id])

    out: List[Citation] = []
    seen = set()
    for cid in claimed:
        match = by_id.get(cid)
        if match is None:
            logger.debug(f"dropping citation {cid!r}: not in retrieved evidence")
            continue
        if match.id in seen:
            continue
        seen.add(match.id)
        out.append(match.model_copy())
    return out


def to_ask_result(output: SynthesizerOutput, retrieved: Sequence[ScoredRecord]) -> AskResult:
    if isinstance(output, ParsedOutput):
        return AskResult(answer=output.answer, citations=reconcile_citations(output.citations, retrieved))
    return AskResult(answer=output.raw_text, citations=[])
