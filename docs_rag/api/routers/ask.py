from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException
from fastapi import status as http

from docs_rag.api.deps import get_ask_service
from docs_rag.core.errors import InvalidQuestionError
from docs_rag.models.answer import AskRequest, AskResult
from docs_rag.services.ask_service import AskService

router = APIRouter()


@router.post("/ask", response_model=AskResult)
async def ask(body: AskRequest, svc: AskService = Depends(get_ask_service)):
    """
    Request JSON: {"question": "string"}
    Response: {"answer": "string", "citations": [{"id": "...", "score": 0.0}]}
    """
    try:
        return await svc.ask(body.question)
    except InvalidQuestionError as e:
        raise HTTPException(http.HTTP_400_BAD_REQUEST, detail=e.message)
