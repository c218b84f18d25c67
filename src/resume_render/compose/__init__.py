"""Section composition into a renderer-agnostic block sequence."""

from resume_render.compose.blocks import ComposedDocument, SectionOrderError
from resume_render.compose.composer import compose_cover_letter, compose_resume

__all__ = [
    "ComposedDocument",
    "SectionOrderError",
    "compose_cover_letter",
    "compose_resume",
]
