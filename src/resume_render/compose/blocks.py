"""Renderer-agnostic block sequence shared by the DOCX and PDF renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from resume_render.models.artifact import DocumentKind


class SectionOrderError(RuntimeError):
    """Raised when content is appended after the final section."""


class Align(str, Enum):
    LEFT = "left"
    CENTER = "center"


class HeadingRole(str, Enum):
    NAME = "name"
    SECTION = "section"


class ParagraphRole(str, Enum):
    CONTACT = "contact"
    LINKS = "links"
    BODY = "body"
    ENTRY_TITLE = "entry_title"
    ENTRY_META = "entry_meta"
    CREDLY = "credly"
    DATE = "date"
    SALUTATION = "salutation"
    SIGNOFF = "signoff"
    SIGNATURE = "signature"


@dataclass(frozen=True)
class TextRun:
    text: str
    bold: bool = False
    italic: bool = False
    link: bool = False


@dataclass(frozen=True)
class HeadingBlock:
    text: str
    role: HeadingRole = HeadingRole.SECTION
    align: Align = Align.LEFT


@dataclass(frozen=True)
class ParagraphBlock:
    runs: tuple[TextRun, ...]
    role: ParagraphRole = ParagraphRole.BODY
    align: Align = Align.LEFT

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass(frozen=True)
class KeyValueLine:
    """``key: value`` on one line, key emphasised."""

    key: str
    value: str

    @property
    def text(self) -> str:
        return f"{self.key}: {self.value}"


@dataclass(frozen=True)
class BulletListBlock:
    items: tuple[str, ...]


Block = Union[HeadingBlock, ParagraphBlock, KeyValueLine, BulletListBlock]


def paragraph(
    text: str,
    role: ParagraphRole = ParagraphRole.BODY,
    align: Align = Align.LEFT,
    **style: bool,
) -> ParagraphBlock:
    """Single-run paragraph shorthand."""
    return ParagraphBlock(runs=(TextRun(text, **style),), role=role, align=align)


@dataclass(frozen=True)
class ComposedDocument:
    kind: DocumentKind
    blocks: tuple[Block, ...]

    def section_titles(self) -> list[str]:
        return [
            b.text for b in self.blocks
            if isinstance(b, HeadingBlock) and b.role is HeadingRole.SECTION
        ]


@dataclass
class DocumentBuilder:
    """Accumulates blocks; sealed once the final section has been added."""

    kind: DocumentKind
    _blocks: list[Block] = field(default_factory=list)
    _sealed: bool = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def add(self, *blocks: Block) -> None:
        if self._sealed:
            raise SectionOrderError(
                "document already ended with its final section; nothing may follow it"
            )
        self._blocks.extend(blocks)

    def add_section(self, title: str, *blocks: Block) -> None:
        self.add(HeadingBlock(title), *blocks)

    def add_final_section(self, title: str, *blocks: Block) -> None:
        self.add_section(title, *blocks)
        self._sealed = True

    def build(self) -> ComposedDocument:
        return ComposedDocument(kind=self.kind, blocks=tuple(self._blocks))
