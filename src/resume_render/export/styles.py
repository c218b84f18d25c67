"""Per-document-kind page profiles for both renderers.

Sizes and spacings are in points. DOCX spacing maps onto paragraph
space-before/after; PDF spacing moves the page cursor.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from resume_render.compose.blocks import (
    Block,
    BulletListBlock,
    HeadingBlock,
    HeadingRole,
    KeyValueLine,
    ParagraphBlock,
)
from resume_render.models.artifact import DocumentKind

Color = tuple[int, int, int]

BLACK: Color = (0x00, 0x00, 0x00)
LINK_COLOR: Color = (0x00, 0x66, 0xCC)
MUTED_COLOR: Color = (0x66, 0x66, 0x66)

LETTER_WIDTH = 612.0
LETTER_HEIGHT = 792.0


@dataclass(frozen=True)
class RoleStyle:
    size: float
    bold: bool = False
    italic: bool = False
    color: Color = BLACK
    space_before: float = 0.0
    space_after: float = 0.0
    indent: float = 0.0


@dataclass(frozen=True)
class DocxProfile:
    margin_inches: float
    roles: dict[str, RoleStyle] = field(default_factory=dict)


@dataclass(frozen=True)
class PdfProfile:
    margin: float
    line_height: float
    max_width: float
    section_reserve: float = 0.0
    roles: dict[str, RoleStyle] = field(default_factory=dict)
    page_width: float = LETTER_WIDTH
    page_height: float = LETTER_HEIGHT


def style_key(block: Block) -> str:
    """Role name a block is styled by."""
    if isinstance(block, HeadingBlock):
        return "name" if block.role is HeadingRole.NAME else "section"
    if isinstance(block, KeyValueLine):
        return "key_value"
    if isinstance(block, BulletListBlock):
        return "bullet"
    if isinstance(block, ParagraphBlock):
        return block.role.value
    raise TypeError(f"Unknown block type: {type(block).__name__}")


DOCX_PROFILES: dict[DocumentKind, DocxProfile] = {
    DocumentKind.RESUME: DocxProfile(
        margin_inches=0.5,
        roles={
            "name": RoleStyle(16, bold=True, space_after=5),
            "contact": RoleStyle(10, space_after=5),
            "links": RoleStyle(9, color=LINK_COLOR, space_after=10),
            "section": RoleStyle(12, bold=True, space_before=10, space_after=5),
            "body": RoleStyle(11, space_after=10),
            "key_value": RoleStyle(10, space_after=2.5),
            "entry_title": RoleStyle(11, space_before=7.5),
            "entry_meta": RoleStyle(10, italic=True, color=MUTED_COLOR, space_after=2.5),
            "bullet": RoleStyle(11, indent=18),
            "credly": RoleStyle(10, color=LINK_COLOR, space_after=5),
        },
    ),
    DocumentKind.COVER_LETTER: DocxProfile(
        margin_inches=0.75,
        roles={
            "name": RoleStyle(14, bold=True, space_after=5),
            "contact": RoleStyle(10, space_after=15),
            "date": RoleStyle(11, space_after=15),
            "salutation": RoleStyle(11, space_after=10),
            "body": RoleStyle(11, space_after=10),
            "signoff": RoleStyle(11, space_before=10, space_after=5),
            "signature": RoleStyle(11, space_after=5),
        },
    ),
}

PDF_PROFILES: dict[DocumentKind, PdfProfile] = {
    DocumentKind.RESUME: PdfProfile(
        margin=50,
        line_height=14,
        max_width=512,
        section_reserve=30,
        roles={
            "name": RoleStyle(18, bold=True, space_after=5),
            "contact": RoleStyle(9),
            "links": RoleStyle(9, color=LINK_COLOR),
            "section": RoleStyle(12, bold=True, space_before=20, space_after=5),
            "body": RoleStyle(10),
            "key_value": RoleStyle(10),
            "entry_title": RoleStyle(10, bold=True, space_before=5),
            "entry_meta": RoleStyle(9, color=MUTED_COLOR),
            "bullet": RoleStyle(10, indent=10),
            "credly": RoleStyle(9, color=LINK_COLOR),
        },
    ),
    DocumentKind.COVER_LETTER: PdfProfile(
        margin=72,
        line_height=16,
        max_width=468,
        roles={
            "name": RoleStyle(14, bold=True, space_after=5),
            "contact": RoleStyle(10, space_after=20),
            "date": RoleStyle(11, space_after=20),
            "salutation": RoleStyle(11, space_after=10),
            "body": RoleStyle(11, space_after=10),
            "signoff": RoleStyle(11, space_before=10, space_after=5),
            "signature": RoleStyle(11),
        },
    ),
}

_FALLBACK_STYLE = RoleStyle(10)


def role_style(roles: dict[str, RoleStyle], block: Block) -> RoleStyle:
    return roles.get(style_key(block), roles.get("body", _FALLBACK_STYLE))
