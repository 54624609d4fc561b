"""
Command-line entry point.

  docs-rag ingest manual.pdf
  docs-rag ask "How do I calibrate the compass?" [--corpus manual.pdf] [--json]

The store lives in process memory, so `ask` ingests its corpus (from --corpus
or CORPUS_PATHS) before answering. `ingest` only loads and chunks documents
to report passage counts; it makes no embedding calls.
"""
from __future__ import annotations
import argparse
import asyncio
import json
import logging
import sys

from docs_rag.core.config import settings
from docs_rag.core.errors import RagError
from docs_rag.ingestion.chunker import chunk_text
from docs_rag.ingestion.document_loader import load_document
from docs_rag.services.ask_service import AskService
from docs_rag.services.corpus_service import CorpusService
from docs_rag.services.ingestion_service import IngestionService


async def cmd_ingest(args) -> int:
    total = 0
    for path in args.paths:
        n = len(chunk_text(load_document(path), settings.CHUNK_SIZE, settings.CHUNK_OVERLAP))
        print(f"{path}: {n} chunks")
        total += n
    print(f"{len(args.paths)} file(s): {total} chunks")
    return 0


async def cmd_ask(args) -> int:
    ingestion = IngestionService()
    corpus = CorpusService(ingestion=ingestion, paths=args.corpus)
    svc = AskService(embedder=ingestion.embedder, corpus=corpus, top_k=args.k)
    result = await svc.ask(args.question)
    if args.json:
        print(json.dumps(result.model_dump(), ensure_ascii=False, indent=2))
    else:
        print(result.answer)
        for c in result.citations:
            print(f"  [{c.id}] score={c.score:.4f}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="docs-rag", description="Grounded question answering over documents")
    sub = p.add_subparsers(dest="cmd", required=True)

    pi = sub.add_parser(
        "ingest",
        help="Chunk documents and report passage counts (no embedding; the store is in-memory, "
             "so use `ask --corpus` or the HTTP API to search them)",
    )
    pi.add_argument("paths", nargs="+", help="PDF or text files")
    pi.set_defaults(func=cmd_ingest)

    pa = sub.add_parser("ask", help="Ask a question")
    pa.add_argument("question")
    pa.add_argument("--corpus", nargs="*", default=None, help="Documents to load (default: CORPUS_PATHS)")
    pa.add_argument("--k", type=int, default=settings.RAG_TOP_K)
    pa.add_argument("--json", action="store_true", help="Print the result as JSON")
    pa.set_defaults(func=cmd_ask)
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format="%(levelname)s %(name)s: %(message)s")
    try:
        return asyncio.run(args.func(args))
    except RagError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
