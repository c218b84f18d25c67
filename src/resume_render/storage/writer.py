"""Persists rendered artifacts to the active storage backend."""

from __future__ import annotations

import asyncio
import logging

from resume_render.models.artifact import Artifact, StoredArtifact
from resume_render.storage.backends import StorageBackend

logger = logging.getLogger(__name__)


class ArtifactWriter:
    """Uploads artifacts without retrying; storage errors reach the caller."""

    def __init__(self, storage: StorageBackend):
        self.storage = storage

    def write_sync(self, artifact: Artifact) -> StoredArtifact:
        stored = self.storage.upload(
            artifact.data, artifact.filename, artifact.format.content_type
        )
        logger.info("Stored %s (%d bytes) via %s",
                    stored.filename, len(artifact.data), self.storage.name)
        return StoredArtifact(
            filename=stored.filename,
            display_name=artifact.display_name,
            url=stored.url,
            kind=artifact.kind,
            format=artifact.format,
            size=len(artifact.data),
        )

    async def write(self, artifact: Artifact) -> StoredArtifact:
        """Upload in a worker thread so sibling writes can proceed concurrently."""
        return await asyncio.to_thread(self.write_sync, artifact)

    async def delete(self, stored: StoredArtifact) -> None:
        await asyncio.to_thread(self.storage.delete, stored.filename)
