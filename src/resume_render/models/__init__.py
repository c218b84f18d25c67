"""Data models for the rendering engine."""

from resume_render.models.artifact import (
    Artifact,
    DocumentFormat,
    DocumentKind,
    StoredArtifact,
)
from resume_render.models.content import (
    CategorizedSkills,
    CoverLetterContent,
    EducationEntry,
    ExperienceEntry,
    FlatSkills,
    ResumeContent,
)
from resume_render.models.identity import Identity, RenderOptions
from resume_render.models.request import GenerationRequest

__all__ = [
    "Artifact",
    "CategorizedSkills",
    "CoverLetterContent",
    "DocumentFormat",
    "DocumentKind",
    "EducationEntry",
    "ExperienceEntry",
    "FlatSkills",
    "GenerationRequest",
    "Identity",
    "RenderOptions",
    "ResumeContent",
    "StoredArtifact",
]
