import logging

from fastapi import FastAPI, Request
from fastapi import status as http
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from docs_rag.core.config import settings
from docs_rag.core.errors import CollaboratorUnavailableError, RagError
from docs_rag.api.routers.ask import router as ask_router
from docs_rag.api.routers.health import router as health_router
from docs_rag.api.routers.ingest import router as ingest_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Docs RAG (grounded Q&A)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router, prefix="/api", tags=["health"])
app.include_router(ask_router, prefix="/api", tags=["ask"])
app.include_router(ingest_router, prefix="/api", tags=["ingest"])


@app.exception_handler(RagError)
async def rag_error_handler(request: Request, exc: RagError) -> JSONResponse:
    if isinstance(exc, CollaboratorUnavailableError):
        code = http.HTTP_502_BAD_GATEWAY
    elif isinstance(exc, ValueError):
        code = http.HTTP_400_BAD_REQUEST
    else:
        code = http.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(status_code=code, content={"detail": exc.message})


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    return JSONResponse(status_code=http.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})
