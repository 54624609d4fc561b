from __future__ import annotations
from typing import Any, Dict
from fastapi import APIRouter, Depends

from docs_rag.api.deps import get_corpus_service, get_record_repo
from docs_rag.repositories.memory.record_repo import RecordRepo
from docs_rag.services.corpus_service import CorpusService

router = APIRouter()


@router.get("/health")
async def health(
    corpus: CorpusService = Depends(get_corpus_service),
    records: RecordRepo = Depends(get_record_repo),
) -> Dict[str, Any]:
    await corpus.ensure_ready()
    return {"ok": True, "vectors": records.count()}
