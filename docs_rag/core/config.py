from __future__ import annotations
import math
from typing import Any, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MIN_SIMILARITY = 0.25


class Settings(BaseSettings):
    # grounding / retrieval
    RAG_MIN_SIMILARITY: float = DEFAULT_MIN_SIMILARITY
    RAG_TOP_K: int = 5
    CHUNK_SIZE: int = 800
    CHUNK_OVERLAP: int = 100

    # collaborators
    EMBEDDING_PROVIDER: str = "openai"  # "openai" | "cohere"
    OPENAI_API_KEY: str | None = None
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_EMBEDDING_MODEL: str = "text-embedding-3-large"
    OPENAI_CHAT_MODEL: str = "gpt-4.1-mini"
    COHERE_API_KEY: str | None = None
    COHERE_EMBEDDING_MODEL: str = "embed-english-v3.0"
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # corpus loaded lazily on the first query
    CORPUS_PATHS: List[str] = []

    LOG_LEVEL: str = "INFO"
    CORS_ALLOW_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("RAG_MIN_SIMILARITY", mode="before")
    @classmethod
    def validate_min_similarity(cls, v: Any) -> float:
        """Unset, unparseable or non-finite thresholds fall back to the default."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_MIN_SIMILARITY
        try:
            n = float(v)
        except (TypeError, ValueError):
            return DEFAULT_MIN_SIMILARITY
        return n if math.isfinite(n) else DEFAULT_MIN_SIMILARITY


settings = Settings()
