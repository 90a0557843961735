"""PDF text extraction used by the ``readPDF`` task."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
import io
import logging
import os
from pathlib import Path

from pdfminer.high_level import extract_text as pdfminer_extract_text
from pypdf import PdfReader

from receiptcheck.errors import PdfExtractionError

logger = logging.getLogger(__name__)

PDF_HEADER = b"%PDF-"
HEADER_SEARCH_BYTES = 1024


@dataclass(slots=True)
class PdfDocumentText:
    """Parser output for one PDF payload."""

    text: str
    page_count: int
    parser: str
    info: dict[str, str] = field(default_factory=dict)


def read_pdf(path_to_pdf: str | os.PathLike[str]) -> str:
    """Return the text of the PDF at ``path_to_pdf``.

    Relative paths are resolved against the current working directory. A
    missing or unreadable file raises the ``OSError`` from the read; a payload
    that is not a parsable PDF raises ``PdfExtractionError``.
    """

    pdf_path = Path(path_to_pdf).resolve()
    payload = pdf_path.read_bytes()
    try:
        document = parse_pdf(payload)
    except PdfExtractionError:
        logger.error("PDF extraction failed for %s", pdf_path, extra={"pdf_path": pdf_path})
        raise
    logger.info(
        "Extracted %d characters from %s (%s, %d pages)",
        len(document.text),
        pdf_path,
        document.parser,
        document.page_count,
        extra={
            "pdf_path": pdf_path,
            "parser": document.parser,
            "page_count": document.page_count,
            "chars": len(document.text),
        },
    )
    return document.text


async def aread_pdf(path_to_pdf: str | os.PathLike[str]) -> str:
    """Awaitable ``read_pdf``; parsing runs in a worker thread."""

    return await asyncio.to_thread(read_pdf, path_to_pdf)


def parse_pdf(payload: bytes) -> PdfDocumentText:
    """Parse raw PDF bytes with pypdf, falling back to pdfminer on empty text."""

    if PDF_HEADER not in payload[:HEADER_SEARCH_BYTES]:
        raise PdfExtractionError("payload is not a PDF document (missing %PDF- header)")

    try:
        reader = PdfReader(io.BytesIO(payload))
        pages = [page.extract_text() or "" for page in reader.pages]
        info = _document_info(reader)
    except Exception as exc:
        raise PdfExtractionError(f"pypdf could not read document: {exc}") from exc
    if not pages:
        raise PdfExtractionError("document has no pages")

    extracted = "\n".join(pages)
    parser = "pypdf"
    if not extracted.strip():
        try:
            fallback_text = pdfminer_extract_text(io.BytesIO(payload)) or ""
        except Exception as exc:
            raise PdfExtractionError(f"pdfminer could not read document: {exc}") from exc
        if len(fallback_text.strip()) > len(extracted.strip()):
            extracted = fallback_text
            parser = "pdfminer"

    return PdfDocumentText(text=extracted, page_count=len(pages), parser=parser, info=info)


def _document_info(reader: PdfReader) -> dict[str, str]:
    metadata = reader.metadata
    if metadata is None:
        return {}
    return {str(key).lstrip("/"): str(value) for key, value in metadata.items()}
