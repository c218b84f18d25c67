"""Artifact naming and storage."""
from resume_render.storage.backends import (
    LocalStorage,
    R2Storage,
    StorageBackend,
    StoredObject,
    SupabaseStorage,
    get_storage,
)
from resume_render.storage.naming import (
    artifact_filename,
    display_name_for,
    sanitize_name,
    strip_uuid,
)
from resume_render.storage.writer import ArtifactWriter

__all__ = [
    "ArtifactWriter",
    "LocalStorage",
    "R2Storage",
    "StorageBackend",
    "StoredObject",
    "SupabaseStorage",
    "artifact_filename",
    "display_name_for",
    "get_storage",
    "sanitize_name",
    "strip_uuid",
]
