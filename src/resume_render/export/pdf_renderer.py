"""Fixed-page renderer: block sequence -> .pdf bytes (fpdf2).

Unlike the DOCX path, every line position is computed here: text is
wrapped with the layout engine against real glyph metrics and pages are
broken by an explicit ``PageCursor``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from fpdf import FPDF

from resume_render.compose.blocks import (
    Align,
    Block,
    BulletListBlock,
    ComposedDocument,
    HeadingBlock,
    HeadingRole,
    KeyValueLine,
    ParagraphBlock,
)
from resume_render.export.styles import (
    LINK_COLOR,
    PDF_PROFILES,
    PdfProfile,
    RoleStyle,
    role_style,
)
from resume_render.layout.text_layout import PageCursor, wrap_text

logger = logging.getLogger(__name__)

CORE_FONT = "Helvetica"
TTF_FONT = "BodyFont"

FIXED_TIMESTAMP = datetime(2000, 1, 1, tzinfo=timezone.utc)

# Typography outside Latin-1 that AI-authored text commonly contains
_LATIN1_SUBSTITUTES = str.maketrans({
    "•": "·",
    "–": "-",
    "—": "-",
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
    "…": "...",
    " ": " ",
})


def render_pdf(document: ComposedDocument, font_path: str | Path | None = None) -> bytes:
    """Render a composed document to the bytes of a complete .pdf file.

    Args:
        document: Block sequence from the section composer.
        font_path: Optional TrueType font for full Unicode coverage. Without
            it the built-in Helvetica is used and text is coerced to Latin-1.
    """
    profile = PDF_PROFILES[document.kind]
    pdf = FPDF(unit="pt", format=(profile.page_width, profile.page_height))
    pdf.set_auto_page_break(auto=False)
    pdf.set_creation_date(FIXED_TIMESTAMP)
    pdf.set_margins(profile.margin, profile.margin, profile.margin)
    pdf.add_page()

    writer = _PageWriter(pdf, profile, _register_font(pdf, font_path))
    for block in document.blocks:
        writer.draw_block(block)

    data = bytes(pdf.output())
    logger.debug("Rendered %s pdf: %d page(s), %d bytes",
                 document.kind.value, writer.cursor.page, len(data))
    return data


def _register_font(pdf: FPDF, font_path: str | Path | None) -> str:
    """Register a TTF font under every style used, or fall back to Helvetica."""
    if font_path is None:
        return CORE_FONT
    path = Path(font_path)
    if not path.exists():
        logger.warning("Font not found: %s, using %s", path, CORE_FONT)
        return CORE_FONT
    try:
        for style in ("", "B", "I", "BI"):
            pdf.add_font(TTF_FONT, style, str(path))
    except Exception:
        logger.warning("Failed to load font %s, using %s", path, CORE_FONT, exc_info=True)
        return CORE_FONT
    return TTF_FONT


class _PageWriter:
    """Draws blocks onto successive fixed-size pages."""

    def __init__(self, pdf: FPDF, profile: PdfProfile, family: str):
        self.pdf = pdf
        self.profile = profile
        self.family = family
        self.cursor = PageCursor(
            top=profile.margin,
            bottom_limit=profile.page_height - profile.margin,
            line_height=profile.line_height,
            on_new_page=lambda _page: pdf.add_page(),
        )

    # -- font helpers -----------------------------------------------------

    def _safe(self, text: str) -> str:
        if self.family != CORE_FONT:
            return text
        text = text.translate(_LATIN1_SUBSTITUTES)
        return text.encode("latin-1", errors="replace").decode("latin-1")

    def _use_font(self, size: float, bold: bool = False, italic: bool = False) -> None:
        style = ("B" if bold else "") + ("I" if italic else "")
        self.pdf.set_font(self.family, style=style, size=size)

    def measure(self, text: str) -> float:
        return self.pdf.get_string_width(self._safe(text))

    # -- drawing ----------------------------------------------------------

    def _draw(self, x: float, y: float, text: str, color: tuple[int, int, int]) -> None:
        if not text:
            return
        self.pdf.set_text_color(*color)
        self.pdf.text(x, y, self._safe(text))

    def _draw_wrapped(
        self,
        text: str,
        style: RoleStyle,
        *,
        bold: bool,
        italic: bool,
        color: tuple[int, int, int],
        align: Align = Align.LEFT,
    ) -> None:
        self._use_font(style.size, bold, italic)
        x = self.profile.margin + style.indent
        width = self.profile.max_width - style.indent
        for line in wrap_text(text, width, self.measure):
            baseline = self.cursor.place_line()
            if align is Align.CENTER:
                x = (self.profile.page_width - self.measure(line)) / 2
            self._draw(x, baseline, line, color)

    def draw_block(self, block: Block) -> None:
        style = role_style(self.profile.roles, block)

        if isinstance(block, HeadingBlock) and block.role is HeadingRole.SECTION:
            self.cursor.advance(style.space_before)
            self.cursor.ensure_room(self.profile.section_reserve)
            self._draw_wrapped(block.text.upper(), style, bold=True, italic=False,
                               color=style.color)
            self.cursor.advance(style.space_after)
            return

        self.cursor.advance(style.space_before)
        if isinstance(block, HeadingBlock):
            self._draw_wrapped(block.text, style, bold=True, italic=style.italic,
                               color=style.color, align=block.align)
        elif isinstance(block, ParagraphBlock):
            runs = block.runs
            self._draw_wrapped(
                block.text,
                style,
                bold=style.bold or all(r.bold for r in runs),
                italic=style.italic or all(r.italic for r in runs),
                color=LINK_COLOR if any(r.link for r in runs) else style.color,
                align=block.align,
            )
        elif isinstance(block, KeyValueLine):
            self._draw_key_value(block, style)
        elif isinstance(block, BulletListBlock):
            for item in block.items:
                self._draw_wrapped(f"• {item}", style, bold=style.bold,
                                   italic=style.italic, color=style.color)
        else:
            raise TypeError(f"Unknown block type: {type(block).__name__}")
        self.cursor.advance(style.space_after)

    def _draw_key_value(self, block: KeyValueLine, style: RoleStyle) -> None:
        """Bold ``key: `` followed by the plain value wrapped around it."""
        x = self.profile.margin + style.indent
        width = self.profile.max_width - style.indent

        key = f"{block.key}: "
        self._use_font(style.size, bold=True)
        key_width = self.measure(key)
        baseline = self.cursor.place_line()
        self._draw(x, baseline, key, style.color)

        self._use_font(style.size)
        lines = wrap_text(block.value, width, self.measure,
                          first_line_width=width - key_width)
        self._draw(x + key_width, baseline, lines[0], style.color)
        for line in lines[1:]:
            self._draw(x, self.cursor.place_line(), line, style.color)
