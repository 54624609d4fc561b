from __future__ import annotations
from typing import List, Sequence
import logging
import httpx

from docs_rag.core.config import settings
from docs_rag.core.errors import CollaboratorUnavailableError
from .base import InputKind

logger = logging.getLogger(__name__)

SERVICE = "cohere embeddings"
BATCH_SIZE = 96  # Cohere's per-request text limit

_INPUT_TYPES = {"document": "search_document", "query": "search_query"}


class CohereProvider:
    """Cohere v1 embedder; v3 models need input_type, which differs for passages and questions."""
    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.COHERE_API_KEY
        self.model = model or settings.COHERE_EMBEDDING_MODEL
        self._transport = transport

    async def embed_texts(self, texts: Sequence[str], kind: InputKind = "document") -> List[List[float]]:
        if not texts:
            return []
        if not self.api_key:
            raise CollaboratorUnavailableError(SERVICE, "COHERE_API_KEY not configured")

        out: List[List[float]] = []
        async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS, transport=self._transport) as client:
            for start in range(0, len(texts), BATCH_SIZE):
                batch = list(texts[start:start + BATCH_SIZE])
                try:
                    r = await client.post(
                        "https://api.cohere.ai/v1/embed",
                        headers={
                            "Authorization": f"Bearer {self.api_key}",
                            "Content-Type": "application/json",
                        },
                        json={
                            "texts": batch,
                            "model": self.model,
                            "input_type": _INPUT_TYPES[kind],
                        },
                    )
                    r.raise_for_status()
                    embs = r.json()["embeddings"]
                except httpx.HTTPStatusError as e:
                    logger.error(f"{SERVICE} returned HTTP {e.response.status_code}")
                    raise CollaboratorUnavailableError(SERVICE, f"HTTP {e.response.status_code}") from e
                except httpx.HTTPError as e:
                    logger.error(f"{SERVICE} request failed: {e}")
                    raise CollaboratorUnavailableError(SERVICE, str(e) or type(e).__name__) from e
                except (KeyError, TypeError, ValueError) as e:
                    raise CollaboratorUnavailableError(SERVICE, "malformed response") from e
                if not isinstance(embs, list) or len(embs) != len(batch):
                    raise CollaboratorUnavailableError(SERVICE, f"expected {len(batch)} vectors")
                out.extend(embs)
        return out
