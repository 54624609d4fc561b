from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException
from fastapi import status as http

from docs_rag.api.deps import get_corpus_service, get_ingestion_service
from docs_rag.models.answer import IngestRequest, IngestResult
from docs_rag.services.corpus_service import CorpusService
from docs_rag.services.ingestion_service import IngestionService

router = APIRouter()


@router.post("/ingest", response_model=IngestResult, status_code=http.HTTP_201_CREATED)
async def ingest(
    body: IngestRequest,
    svc: IngestionService = Depends(get_ingestion_service),
    corpus: CorpusService = Depends(get_corpus_service),
):
    """
    Request JSON:
    {
      "text": "full document text",
      "source": "manual.pdf",   # required, must not already be in the store
      "replace": false          # true swaps out the whole corpus
    }
    """
    if not body.text.strip():
        raise HTTPException(http.HTTP_400_BAD_REQUEST, detail="Missing text")
    # the lazy corpus load replaces the store; it must finish before we add to it
    await corpus.ensure_ready()
    return await svc.ingest(body.text, body.source, replace=body.replace)
