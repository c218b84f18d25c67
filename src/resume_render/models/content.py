"""Pydantic models for generator-authored résumé and cover-letter content.

The content generator emits loosely shaped JSON. Every field here tolerates
absent, null, blank or wrongly shaped values: they are coerced to "absent"
at validation time so that rendering never has to re-check types.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator
from pydantic.alias_generators import to_camel

CONTENT_MODEL_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "frozen": True,
}


def clean_text(value: Any) -> str | None:
    """Normalise an optional scalar to a stripped string, or None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def clean_text_list(value: Any) -> list[str]:
    """Keep only the non-blank text members of a list-like value."""
    if not isinstance(value, (list, tuple)):
        return []
    items = (clean_text(v) for v in value)
    return [v for v in items if v]


def _dict_entries(value: Any, model: type[BaseModel]) -> list:
    if not isinstance(value, (list, tuple)):
        return []
    return [v for v in value if isinstance(v, (dict, model))]


class CategorizedSkills(BaseModel):
    """Current skills format: newline-delimited ``Category: a, b`` lines."""

    text: str

    model_config = {"frozen": True}

    def lines(self) -> list[str]:
        return [line.strip() for line in self.text.splitlines() if line.strip()]

    def __bool__(self) -> bool:
        return bool(self.text.strip())


class FlatSkills(BaseModel):
    """Legacy skills format: a plain list of skill names."""

    items: list[str]

    model_config = {"frozen": True}

    def __bool__(self) -> bool:
        return bool(self.items)


def sniff_skills(value: Any) -> CategorizedSkills | FlatSkills | None:
    """Resolve the two historical skills shapes into a tagged variant."""
    if isinstance(value, (CategorizedSkills, FlatSkills)):
        return value
    if isinstance(value, str):
        return CategorizedSkills(text=value) if value.strip() else None
    if isinstance(value, (list, tuple)):
        items = clean_text_list(value)
        return FlatSkills(items=items) if items else None
    # Already-tagged payloads, e.g. from model_dump()
    if isinstance(value, dict):
        if "text" in value:
            return sniff_skills(value["text"])
        if "items" in value:
            return sniff_skills(value["items"])
    return None


class ExperienceEntry(BaseModel):
    position: str | None = None
    company: str | None = None
    location: str | None = None
    period: str | None = None
    achievements: list[str] = []

    model_config = CONTENT_MODEL_CONFIG

    @field_validator("position", "company", "location", "period", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str | None:
        return clean_text(v)

    @field_validator("achievements", mode="before")
    @classmethod
    def _achievements(cls, v: Any) -> list[str]:
        return clean_text_list(v)


class EducationEntry(BaseModel):
    degree: str | None = None
    institution: str | None = None
    graduation: str | None = None
    details: str | None = None

    model_config = CONTENT_MODEL_CONFIG

    @field_validator("degree", "institution", "graduation", "details", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str | None:
        return clean_text(v)


class ResumeContent(BaseModel):
    summary: str | None = None
    skills: CategorizedSkills | FlatSkills | None = None
    experience: list[ExperienceEntry] = []
    education: list[EducationEntry] = []
    certifications: list[str] = []

    model_config = CONTENT_MODEL_CONFIG

    @field_validator("summary", mode="before")
    @classmethod
    def _summary(cls, v: Any) -> str | None:
        return clean_text(v)

    @field_validator("skills", mode="before")
    @classmethod
    def _skills(cls, v: Any) -> CategorizedSkills | FlatSkills | None:
        return sniff_skills(v)

    @field_validator("experience", mode="before")
    @classmethod
    def _experience(cls, v: Any) -> list:
        return _dict_entries(v, ExperienceEntry)

    @field_validator("education", mode="before")
    @classmethod
    def _education(cls, v: Any) -> list:
        return _dict_entries(v, EducationEntry)

    @field_validator("certifications", mode="before")
    @classmethod
    def _certifications(cls, v: Any) -> list[str]:
        return clean_text_list(v)


class CoverLetterContent(BaseModel):
    salutation: str | None = None
    opening: str | None = None
    body: str | None = None
    company_fit: str | None = None
    closing: str | None = None
    signoff: str | None = None

    model_config = CONTENT_MODEL_CONFIG

    @field_validator(
        "salutation", "opening", "body", "company_fit", "closing", "signoff",
        mode="before",
    )
    @classmethod
    def _text(cls, v: Any) -> str | None:
        return clean_text(v)

    def paragraphs(self) -> list[str]:
        """Body paragraphs that are present, in letter order."""
        ordered = [self.opening, self.body, self.company_fit, self.closing]
        return [p for p in ordered if p]
