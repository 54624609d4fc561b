from __future__ import annotations
from typing import List, Sequence
import logging
import httpx

from docs_rag.core.config import settings
from docs_rag.core.errors import CollaboratorUnavailableError
from .base import InputKind

logger = logging.getLogger(__name__)

SERVICE = "openai embeddings"
BATCH_SIZE = 256


class OpenAIEmbeddingProvider:
    """OpenAI /embeddings over httpx, batched; the service is order-agnostic so results are re-sorted by index."""
    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.OPENAI_API_KEY
        self.model = model or settings.OPENAI_EMBEDDING_MODEL
        self.base_url = (base_url or settings.OPENAI_BASE_URL).rstrip("/")
        self._transport = transport

    async def embed_texts(self, texts: Sequence[str], kind: InputKind = "document") -> List[List[float]]:
        if not texts:
            return []
        if not self.api_key:
            raise CollaboratorUnavailableError(SERVICE, "OPENAI_API_KEY not configured")

        out: List[List[float]] = []
        async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS, transport=self._transport) as client:
            for start in range(0, len(texts), BATCH_SIZE):
                batch = list(texts[start:start + BATCH_SIZE])
                out.extend(await self._embed_batch(client, batch))
        return out

    async def _embed_batch(self, client: httpx.AsyncClient, batch: List[str]) -> List[List[float]]:
        try:
            r = await client.post(
                f"{self.base_url}/embeddings",
                headers={"Authorization": f"Bearer {self.api_key}"},
                json={"model": self.model, "input": batch},
            )
            r.raise_for_status()
            data = r.json()["data"]
            vectors = [d["embedding"] for d in sorted(data, key=lambda d: d["index"])]
        except httpx.HTTPStatusError as e:
            logger.error(f"{SERVICE} returned HTTP {e.response.status_code}")
            raise CollaboratorUnavailableError(SERVICE, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"{SERVICE} request failed: {e}")
            raise CollaboratorUnavailableError(SERVICE, str(e) or type(e).__name__) from e
        except (KeyError, TypeError, ValueError) as e:
            raise CollaboratorUnavailableError(SERVICE, "malformed response") from e

        if len(vectors) != len(batch):
            raise CollaboratorUnavailableError(SERVICE, f"expected {len(batch)} vectors, got {len(vectors)}")
        return vectors
