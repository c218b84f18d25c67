"""Collision-resistant artifact filenames.

Storage name = display name + ``_`` + UUID4, so either can be derived from
the other: ``Jane_OBrien_Resume_<uuid>.pdf`` <-> ``Jane_OBrien_Resume.pdf``.
"""

from __future__ import annotations

import re
import uuid
from pathlib import PurePosixPath

from resume_render.models.artifact import DocumentFormat, DocumentKind

FALLBACK_NAME = "User"

_DISALLOWED = re.compile(r"[^A-Za-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")
_UUID_SUFFIX = re.compile(
    r"_[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}(?=\.[A-Za-z0-9]+$)",
    re.IGNORECASE,
)


def sanitize_name(name: str | None) -> str:
    """Drop characters outside ``[A-Za-z0-9\\s]`` and underscore the spaces."""
    cleaned = _DISALLOWED.sub("", name or "").strip()
    cleaned = _WHITESPACE.sub("_", cleaned)
    return cleaned or FALLBACK_NAME


def display_name_for(subject: str | None, kind: DocumentKind, fmt: DocumentFormat) -> str:
    """Human-facing download name, e.g. ``Jane_OBrien_Resume.pdf``."""
    return f"{sanitize_name(subject)}_{kind.label}.{fmt.extension}"


def artifact_filename(subject: str | None, kind: DocumentKind, fmt: DocumentFormat) -> str:
    """Fresh storage name; never reused across calls."""
    return f"{sanitize_name(subject)}_{kind.label}_{uuid.uuid4()}.{fmt.extension}"


def strip_uuid(filename: str) -> str:
    """Recover the download name from a storage name or storage key."""
    name = PurePosixPath(filename).name
    return _UUID_SUFFIX.sub("", name, count=1)
