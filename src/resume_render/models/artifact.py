"""Pydantic models for rendered and stored artifacts."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class DocumentKind(str, Enum):
    RESUME = "resume"
    COVER_LETTER = "cover_letter"

    @property
    def label(self) -> str:
        """Fixed filename label for this kind of document."""
        return "Resume" if self is DocumentKind.RESUME else "Cover_Letter"


class DocumentFormat(str, Enum):
    DOCX = "docx"
    PDF = "pdf"

    @property
    def extension(self) -> str:
        return self.value

    @property
    def content_type(self) -> str:
        if self is DocumentFormat.DOCX:
            return "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
        return "application/pdf"


class Artifact(BaseModel):
    """Bytes of one renderer invocation plus the filename they are stored under."""

    filename: str
    display_name: str
    data: bytes
    kind: DocumentKind
    format: DocumentFormat

    model_config = {"frozen": True}


class StoredArtifact(BaseModel):
    """Reference to a persisted artifact, as handed to the persistence layer."""

    filename: str  # storage key
    display_name: str  # human-facing download name
    url: str | None = None
    kind: DocumentKind
    format: DocumentFormat
    size: int = 0
