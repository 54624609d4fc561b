from __future__ import annotations
from pathlib import Path
import logging

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from docs_rag.core.errors import IngestionError

logger = logging.getLogger(__name__)


def load_pdf(path: str | Path) -> str:
    try:
        reader = PdfReader(str(path))
        pages = [page.extract_text() or "" for page in reader.pages]
    except (OSError, PdfReadError) as e:
        raise IngestionError(f"cannot read PDF {Path(path).name}: {e}") from e
    logger.info(f"loaded {len(pages)} pages from {Path(path).name}")
    return "\n".join(pages)


def load_document(path: str | Path) -> str:
    """Full text of a document: PDFs through pypdf, anything else as UTF-8 text."""
    p = Path(path)
    if p.suffix.lower() == ".pdf":
        return load_pdf(p)
    try:
        return p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IngestionError(f"cannot read {p.name}: {e}") from e
