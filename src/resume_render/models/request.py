"""Pydantic model for a complete generation request (CLI job files)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, field_validator

from resume_render.models.content import CONTENT_MODEL_CONFIG, CoverLetterContent, ResumeContent
from resume_render.models.identity import Identity, RenderOptions


class GenerationRequest(BaseModel):
    identity: Identity
    resume: ResumeContent = ResumeContent()
    cover_letter: CoverLetterContent | None = None
    options: RenderOptions = RenderOptions()

    model_config = CONTENT_MODEL_CONFIG

    @field_validator("resume", "options", mode="before")
    @classmethod
    def _object_or_empty(cls, v: Any) -> Any:
        return v if isinstance(v, (dict, BaseModel)) else {}

    @field_validator("cover_letter", mode="before")
    @classmethod
    def _object_or_none(cls, v: Any) -> Any:
        return v if isinstance(v, (dict, BaseModel)) else None

    @classmethod
    def from_file(cls, path: str | Path) -> "GenerationRequest":
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.model_validate(raw)
