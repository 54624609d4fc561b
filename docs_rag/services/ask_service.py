from __future__ import annotations
from typing import Optional
import logging

from docs_rag.core.config import settings
from docs_rag.core.errors import CollaboratorUnavailableError, InvalidQuestionError
from docs_rag.models.answer import AskResult
from docs_rag.adapters.embedding_providers import EmbeddingProvider, default_embedder
from docs_rag.adapters.generation_providers.base import GenerationProvider
from docs_rag.adapters.generation_providers.openai_chat import OpenAIChatProvider
from docs_rag.prompts.grounded_answer import build_prompt
from docs_rag.services.answer_parser import parse_synthesizer_output, to_ask_result
from docs_rag.services.corpus_service import CorpusService
from docs_rag.services.grounding import GroundingGate, refusal
from docs_rag.services.retrieval_service import RetrievalService

logger = logging.getLogger(__name__)


class AskService:
    """
    question -> query vector -> top-k evidence -> grounding gate
             -> prompt -> model -> parse -> reconcile citations.
    Never mutates the record store.
    """

    def __init__(
        self,
        retrieval: Optional[RetrievalService] = None,
        embedder: Optional[EmbeddingProvider] = None,
        generator: Optional[GenerationProvider] = None,
        gate: Optional[GroundingGate] = None,
        corpus: Optional[CorpusService] = None,
        top_k: Optional[int] = None,
    ) -> None:
        self.retrieval = retrieval or RetrievalService()
        self.embedder = embedder or default_embedder()
        self.generator = generator or OpenAIChatProvider()
        self.gate = gate or GroundingGate()
        self.corpus = corpus or CorpusService.instance()
        self.top_k = top_k or settings.RAG_TOP_K

    async def ask(self, question: str) -> AskResult:
        question = (question or "").strip()
        if not question:
            raise InvalidQuestionError("Missing question")

        await self.corpus.ensure_ready()

        vectors = await self.embedder.embed_texts([question], kind="query")
        if len(vectors) != 1:
            raise CollaboratorUnavailableError("embeddings", f"expected 1 vector, got {len(vectors)}")

        results = self.retrieval.search(vectors[0], self.top_k)
        if not self.gate.should_answer(results):
            return refusal()

        prompt = build_prompt(results, question)
        raw = await self.generator.generate(prompt.instruction_frame, prompt.evidence_block, prompt.question)

        result = to_ask_result(parse_synthesizer_output(raw), results)
        logger.info(f"answered with {len(result.citations)}/{len(results)} citations")
        return result
