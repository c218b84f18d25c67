"""Read the text back out of rendered artifacts."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

from resume_render.models.artifact import DocumentFormat


def extract_text(data: bytes, fmt: DocumentFormat) -> str:
    """Return the plain text of a .docx or .pdf, one paragraph/line per row."""
    if fmt is DocumentFormat.PDF:
        return "\n".join(extract_pdf_pages(data))
    return "\n".join(p.text for p in _docx_paragraphs(data) if p.text.strip())


def extract_pdf_pages(data: bytes) -> list[str]:
    import fitz  # pymupdf

    doc = fitz.open(stream=data, filetype="pdf")
    pages = [page.get_text() for page in doc]
    doc.close()
    return pages


def _docx_paragraphs(data: bytes):
    from docx import Document

    return Document(BytesIO(data)).paragraphs


def extract_file_text(path: str | Path) -> str:
    """Plain text of a .docx or .pdf file on disk."""
    path = Path(path)
    suffix = path.suffix.lower().lstrip(".")
    try:
        fmt = DocumentFormat(suffix)
    except ValueError:
        raise ValueError(f"Unsupported file format: {path.suffix}") from None
    return extract_text(path.read_bytes(), fmt)
