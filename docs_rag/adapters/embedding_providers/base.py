from __future__ import annotations
from typing import List, Literal, Protocol, Sequence

InputKind = Literal["document", "query"]


class EmbeddingProvider(Protocol):
    """text[] -> vector[]: one fixed-dimension vector per input, same order."""
    async def embed_texts(self, texts: Sequence[str], kind: InputKind = "document") -> List[List[float]]:
        ...
