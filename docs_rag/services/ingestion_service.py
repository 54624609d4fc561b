from __future__ import annotations
from pathlib import Path
from typing import Optional
import logging

from docs_rag.core.config import settings
from docs_rag.core.errors import DuplicateRecordError, IngestionError
from docs_rag.models.answer import IngestResult
from docs_rag.models.record import Record, make_record_id
from docs_rag.repositories.memory.record_repo import RecordRepo
from docs_rag.adapters.embedding_providers import EmbeddingProvider, default_embedder
from docs_rag.ingestion.chunker import chunk_text
from docs_rag.ingestion.document_loader import load_document

logger = logging.getLogger(__name__)


class IngestionService:
    """
    Document text -> passages -> embeddings -> one batch in the record store.
    The store is only touched after every embedding has come back, so a failed
    embedding call leaves it exactly as it was.
    """

    def __init__(
        self,
        records: Optional[RecordRepo] = None,
        embedder: Optional[EmbeddingProvider] = None,
        chunk_size: Optional[int] = None,
        chunk_overlap: Optional[int] = None,
    ) -> None:
        self.records = records or RecordRepo.instance()
        self.embedder = embedder or default_embedder()
        self.chunk_size = chunk_size or settings.CHUNK_SIZE
        self.chunk_overlap = settings.CHUNK_OVERLAP if chunk_overlap is None else chunk_overlap

    async def build_records(self, document_text: str, source: str) -> list[Record]:
        chunks = chunk_text(document_text, self.chunk_size, self.chunk_overlap)
        if not chunks:
            return []
        embeddings = await self.embedder.embed_texts(chunks, kind="document")
        if len(embeddings) != len(chunks):
            raise IngestionError(f"got {len(embeddings)} embeddings for {len(chunks)} chunks")
        return [
            Record(id=make_record_id(source, i), source=source, embedding=emb, content=chunk)
            for i, (chunk, emb) in enumerate(zip(chunks, embeddings))
        ]

    async def ingest(self, document_text: str, source: str = "document", *, replace: bool = False) -> IngestResult:
        """
        Add one document to the corpus. Without `replace`, existing records stay
        searchable alongside the new ones; with it the whole corpus is swapped.
        """
        if not replace and self.records.has(make_record_id(source, 0)):
            raise DuplicateRecordError(make_record_id(source, 0))
        records = await self.build_records(document_text, source)
        if replace:
            self.records.replace(records)
        else:
            self.records.append(records)
        logger.info(f"ingested {source}: {len(records)} chunks (store size {self.records.count()})")
        return IngestResult(chunk_count=len(records))

    async def ingest_files(self, paths: list[str], *, replace: bool = False) -> IngestResult:
        """Ingest several files as a single store write."""
        batch: list[Record] = []
        names = [Path(p).name for p in paths]
        for path, name in zip(paths, names):
            # same file name from two directories: fall back to the path as the label
            source = name if names.count(name) == 1 else str(path)
            text = load_document(path)
            batch.extend(await self.build_records(text, source))
        if replace:
            self.records.replace(batch)
        else:
            self.records.append(batch)
        logger.info(f"ingested {len(paths)} file(s): {len(batch)} chunks")
        return IngestResult(chunk_count=len(batch))
