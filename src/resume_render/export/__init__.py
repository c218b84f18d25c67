"""DOCX and PDF renderers for composed documents."""
from resume_render.export.docx_renderer import render_docx
from resume_render.export.pdf_renderer import render_pdf

__all__ = ["render_docx", "render_pdf"]
