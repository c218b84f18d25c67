"""Storage backends for rendered artifacts.

Backends are synchronous; ``ArtifactWriter`` runs them in worker threads.
No retries happen here: failures propagate to the caller as raised.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

import boto3
import requests
from botocore.exceptions import BotoCoreError, ClientError

from resume_render.config import StorageConfig

logger = logging.getLogger(__name__)

UPLOAD_PREFIX = "uploads"


@dataclass(frozen=True)
class StoredObject:
    """Where an upload landed: the storage key and, if any, a durable URL."""

    filename: str
    url: str | None = None


class StorageBackend(ABC):
    name: str = "abstract"

    @abstractmethod
    def upload(self, data: bytes, filename: str, content_type: str) -> StoredObject:
        """Persist ``data`` under ``filename``."""

    @abstractmethod
    def delete(self, filename: str) -> None:
        """Remove a stored object; missing objects are not an error."""

    @abstractmethod
    def url_for(self, filename: str) -> str | None:
        """Durable URL for a stored object, if the backend serves one."""


class LocalStorage(StorageBackend):
    """Writes artifacts into a directory on the local filesystem."""

    name = "local"

    def __init__(self, root: str | Path = "./uploads", base_url: str | None = None):
        self.root = Path(root).expanduser()
        self.base_url = base_url.rstrip("/") if base_url else None

    def upload(self, data: bytes, filename: str, content_type: str) -> StoredObject:
        self.root.mkdir(parents=True, exist_ok=True)
        path = self.root / filename
        path.write_bytes(data)
        logger.debug("Wrote %d bytes to %s", len(data), path)
        return StoredObject(filename=filename, url=self.url_for(filename))

    def delete(self, filename: str) -> None:
        (self.root / filename).unlink(missing_ok=True)

    def url_for(self, filename: str) -> str | None:
        if self.base_url is None:
            return None
        return f"{self.base_url}/{filename}"


class SupabaseStorage(StorageBackend):
    """Supabase Storage via its REST API; objects live under ``uploads/``."""

    name = "supabase"

    def __init__(
        self,
        url: str | None = None,
        key: str | None = None,
        bucket: str | None = None,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ):
        url = url or os.environ.get("SUPABASE_URL")
        key = key or os.environ.get("SUPABASE_SERVICE_KEY")
        if not url or not key:
            raise ValueError(
                "Supabase not configured. Set SUPABASE_URL and SUPABASE_SERVICE_KEY."
            )
        self.url = url.rstrip("/")
        self.key = key
        self.bucket = bucket or os.environ.get("SUPABASE_BUCKET") or "resumes"
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self, **extra: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.key}", "apikey": self.key, **extra}

    def _object_url(self, key: str) -> str:
        return f"{self.url}/storage/v1/object/{self.bucket}/{key}"

    def upload(self, data: bytes, filename: str, content_type: str) -> StoredObject:
        key = f"{UPLOAD_PREFIX}/{filename}"
        try:
            response = self.session.post(
                self._object_url(key),
                data=data,
                headers=self._headers(**{"Content-Type": content_type, "x-upsert": "true"}),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException:
            logger.error("Supabase upload failed: %s", key, exc_info=True)
            raise
        return StoredObject(filename=key, url=self.url_for(key))

    def delete(self, filename: str) -> None:
        response = self.session.delete(
            f"{self.url}/storage/v1/object/{self.bucket}",
            json={"prefixes": [filename]},
            headers=self._headers(),
            timeout=self.timeout,
        )
        response.raise_for_status()

    def url_for(self, filename: str) -> str | None:
        return f"{self.url}/storage/v1/object/public/{self.bucket}/{filename}"


class R2Storage(StorageBackend):
    """Cloudflare R2 through its S3-compatible API; objects live under ``uploads/``."""

    name = "r2"

    def __init__(
        self,
        account_id: str | None = None,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        bucket: str | None = None,
        public_url: str | None = None,
        client=None,
    ):
        account_id = account_id or os.environ.get("R2_ACCOUNT_ID")
        access_key_id = access_key_id or os.environ.get("R2_ACCESS_KEY_ID")
        secret_access_key = secret_access_key or os.environ.get("R2_SECRET_ACCESS_KEY")
        bucket = bucket or os.environ.get("R2_BUCKET_NAME")
        if not (account_id and access_key_id and secret_access_key and bucket):
            raise ValueError(
                "R2 not configured. Set R2_ACCOUNT_ID, R2_ACCESS_KEY_ID, "
                "R2_SECRET_ACCESS_KEY and R2_BUCKET_NAME."
            )
        self.bucket = bucket
        public_url = public_url or os.environ.get("R2_PUBLIC_URL")
        self.public_url = public_url.rstrip("/") if public_url else None
        self.client = client or boto3.client(
            "s3",
            region_name="auto",
            endpoint_url=f"https://{account_id}.r2.cloudflarestorage.com",
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
        )

    def upload(self, data: bytes, filename: str, content_type: str) -> StoredObject:
        key = f"{UPLOAD_PREFIX}/{filename}"
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
                Metadata={"upload-date": datetime.now(timezone.utc).isoformat()},
            )
        except (BotoCoreError, ClientError):
            logger.error("R2 upload failed: %s", key, exc_info=True)
            raise
        return StoredObject(filename=key, url=self.url_for(key))

    def delete(self, filename: str) -> None:
        self.client.delete_object(Bucket=self.bucket, Key=filename)

    def url_for(self, filename: str) -> str | None:
        if self.public_url is None:
            return None
        return f"{self.public_url}/{filename}"


def get_storage(config: StorageConfig | None = None) -> StorageBackend:
    """Build the active backend; ``STORAGE_PROVIDER`` overrides the config."""
    config = config or StorageConfig()
    provider = os.environ.get("STORAGE_PROVIDER", config.provider).strip().lower()
    if provider == "local":
        return LocalStorage(config.resolved_local_dir, base_url=config.public_base_url)
    if provider == "supabase":
        return SupabaseStorage(bucket=config.supabase_bucket, timeout=config.timeout)
    if provider == "r2":
        return R2Storage(bucket=config.r2_bucket, public_url=config.public_base_url)
    raise ValueError(f"Unknown storage provider: {provider!r}")
