"""Pydantic models for the document subject and per-render options."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator

from resume_render.models.content import CONTENT_MODEL_CONFIG, clean_text, clean_text_list


class Identity(BaseModel):
    full_name: str
    email: str | None = None
    phone_number: str | None = None
    address: str | None = None
    linkedin_profile: str | None = None
    github_link: str | None = None

    model_config = CONTENT_MODEL_CONFIG

    @field_validator("full_name", mode="before")
    @classmethod
    def _name(cls, v: Any) -> str:
        return clean_text(v) or ""

    @field_validator(
        "email", "phone_number", "address", "linkedin_profile", "github_link",
        mode="before",
    )
    @classmethod
    def _text(cls, v: Any) -> str | None:
        return clean_text(v)

    def contact_parts(self) -> list[str]:
        return [p for p in (self.email, self.phone_number, self.address) if p]

    def link_parts(self) -> list[str]:
        parts = []
        if self.linkedin_profile:
            parts.append(f"LinkedIn: {self.linkedin_profile}")
        if self.github_link:
            parts.append(f"GitHub: {self.github_link}")
        return parts


class RenderOptions(BaseModel):
    credly_profile_link: str | None = None
    tags: list[str] = []

    model_config = CONTENT_MODEL_CONFIG

    @field_validator("credly_profile_link", mode="before")
    @classmethod
    def _credly(cls, v: Any) -> str | None:
        return clean_text(v)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, v: Any) -> list[str]:
        return clean_text_list(v)
