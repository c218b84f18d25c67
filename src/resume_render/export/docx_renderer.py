"""Flow-document renderer: block sequence -> .docx bytes (python-docx).

Pagination is left to the word processor; this module only maps each
block onto styled paragraphs and runs.
"""

from __future__ import annotations

import logging
from datetime import datetime
from io import BytesIO

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Inches, Pt, RGBColor

from resume_render.compose.blocks import (
    Align,
    Block,
    BulletListBlock,
    ComposedDocument,
    HeadingBlock,
    HeadingRole,
    KeyValueLine,
    ParagraphBlock,
    TextRun,
)
from resume_render.export.styles import (
    DOCX_PROFILES,
    LINK_COLOR,
    DocxProfile,
    RoleStyle,
    role_style,
)

logger = logging.getLogger(__name__)

# Pinned so repeated renders of the same content carry the same metadata
FIXED_TIMESTAMP = datetime(2000, 1, 1)


def render_docx(document: ComposedDocument) -> bytes:
    """Render a composed document to the bytes of a complete .docx file."""
    profile = DOCX_PROFILES[document.kind]
    doc = Document()
    _setup_page(doc, profile)

    for block in document.blocks:
        _render_block(doc, block, profile)

    buf = BytesIO()
    doc.save(buf)
    data = buf.getvalue()
    logger.debug("Rendered %s docx: %d blocks, %d bytes",
                 document.kind.value, len(document.blocks), len(data))
    return data


def _setup_page(doc, profile: DocxProfile) -> None:
    section = doc.sections[0]
    section.page_width = Inches(8.5)
    section.page_height = Inches(11)
    margin = Inches(profile.margin_inches)
    section.top_margin = margin
    section.bottom_margin = margin
    section.left_margin = margin
    section.right_margin = margin

    font = doc.styles["Normal"].font
    font.name = "Calibri"
    font.size = Pt(11)

    props = doc.core_properties
    props.created = FIXED_TIMESTAMP
    props.modified = FIXED_TIMESTAMP
    props.last_modified_by = "resume-render"
    props.revision = 1


def _render_block(doc, block: Block, profile: DocxProfile) -> None:
    style = role_style(profile.roles, block)

    if isinstance(block, HeadingBlock):
        text = block.text.upper() if block.role is HeadingRole.SECTION else block.text
        _add_paragraph(doc, [TextRun(text, bold=True)], style, block.align)
    elif isinstance(block, ParagraphBlock):
        _add_paragraph(doc, block.runs, style, block.align)
    elif isinstance(block, KeyValueLine):
        runs = [TextRun(f"{block.key}: ", bold=True), TextRun(block.value)]
        _add_paragraph(doc, runs, style)
    elif isinstance(block, BulletListBlock):
        for item in block.items:
            _add_paragraph(doc, [TextRun(f"• {item}")], style)
    else:
        raise TypeError(f"Unknown block type: {type(block).__name__}")


def _add_paragraph(doc, runs, style: RoleStyle, align: Align = Align.LEFT) -> None:
    para = doc.add_paragraph()
    if align is Align.CENTER:
        para.alignment = WD_ALIGN_PARAGRAPH.CENTER

    fmt = para.paragraph_format
    fmt.space_before = Pt(style.space_before)
    fmt.space_after = Pt(style.space_after)
    if style.indent:
        fmt.left_indent = Pt(style.indent)

    for run in runs:
        r = para.add_run(run.text)
        r.bold = run.bold or style.bold
        r.italic = run.italic or style.italic
        r.font.size = Pt(style.size)
        r.font.color.rgb = RGBColor(*(LINK_COLOR if run.link else style.color))
