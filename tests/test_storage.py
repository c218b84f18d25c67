"""Tests for storage backends and the artifact writer."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests
from botocore.exceptions import ClientError

from resume_render.config import StorageConfig
from resume_render.models import Artifact, DocumentFormat, DocumentKind
from resume_render.storage.backends import (
    LocalStorage,
    R2Storage,
    SupabaseStorage,
    get_storage,
)

UUID = "3f2b8c1e-9a4d-4e6f-8b2a-1c0d9e8f7a6b"


def _artifact(fmt=DocumentFormat.PDF) -> Artifact:
    return Artifact(
        filename=f"Jane_Resume_{UUID}.{fmt.extension}",
        display_name=f"Jane_Resume.{fmt.extension}",
        data=b"%PDF-1.4 test",
        kind=DocumentKind.RESUME,
        format=fmt,
    )


class TestLocalStorage:
    def test_upload_creates_directory(self, tmp_path):
        storage = LocalStorage(tmp_path / "nested" / "out")
        stored = storage.upload(b"abc", "a.pdf", "application/pdf")
        assert (tmp_path / "nested" / "out" / "a.pdf").read_bytes() == b"abc"
        assert stored.filename == "a.pdf"
        assert stored.url is None

    def test_base_url(self, tmp_path):
        storage = LocalStorage(tmp_path, base_url="https://files.example.com/")
        stored = storage.upload(b"abc", "a.pdf", "application/pdf")
        assert stored.url == "https://files.example.com/a.pdf"

    def test_delete_missing_is_noop(self, tmp_path):
        LocalStorage(tmp_path).delete("nothing-here.pdf")

    def test_delete(self, local_storage):
        local_storage.upload(b"abc", "a.pdf", "application/pdf")
        local_storage.delete("a.pdf")
        assert not (local_storage.root / "a.pdf").exists()


class TestSupabaseStorage:
    def _storage(self, session) -> SupabaseStorage:
        return SupabaseStorage(
            url="https://proj.supabase.co/",
            key="service-key",
            bucket="docs",
            session=session,
        )

    def test_upload_request(self):
        session = MagicMock()
        storage = self._storage(session)
        stored = storage.upload(b"data", "a.pdf", "application/pdf")

        args, kwargs = session.post.call_args
        assert args[0] == "https://proj.supabase.co/storage/v1/object/docs/uploads/a.pdf"
        assert kwargs["data"] == b"data"
        assert kwargs["headers"]["Authorization"] == "Bearer service-key"
        assert kwargs["headers"]["apikey"] == "service-key"
        assert kwargs["headers"]["Content-Type"] == "application/pdf"
        assert stored.filename == "uploads/a.pdf"
        assert stored.url == "https://proj.supabase.co/storage/v1/object/public/docs/uploads/a.pdf"

    def test_upload_error_propagates(self):
        session = MagicMock()
        session.post.return_value.raise_for_status.side_effect = requests.HTTPError("403")
        with pytest.raises(requests.HTTPError):
            self._storage(session).upload(b"data", "a.pdf", "application/pdf")
        assert session.post.call_count == 1

    def test_delete_request(self):
        session = MagicMock()
        self._storage(session).delete("uploads/a.pdf")
        args, kwargs = session.delete.call_args
        assert args[0] == "https://proj.supabase.co/storage/v1/object/docs"
        assert kwargs["json"] == {"prefixes": ["uploads/a.pdf"]}

    def test_env_configuration(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://env.supabase.co")
        monkeypatch.setenv("SUPABASE_SERVICE_KEY", "env-key")
        monkeypatch.delenv("SUPABASE_BUCKET", raising=False)
        storage = SupabaseStorage(session=MagicMock())
        assert storage.url == "https://env.supabase.co"
        assert storage.bucket == "resumes"

    def test_missing_credentials(self, monkeypatch):
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        monkeypatch.delenv("SUPABASE_SERVICE_KEY", raising=False)
        with pytest.raises(ValueError, match="SUPABASE_URL"):
            SupabaseStorage()


class TestR2Storage:
    def _storage(self, client, public_url=None) -> R2Storage:
        return R2Storage(
            account_id="acct",
            access_key_id="key-id",
            secret_access_key="secret",
            bucket="docs",
            public_url=public_url,
            client=client,
        )

    def test_upload_request(self):
        client = MagicMock()
        stored = self._storage(client, "https://cdn.example.com/").upload(
            b"data", "a.pdf", "application/pdf"
        )

        kwargs = client.put_object.call_args.kwargs
        assert kwargs["Bucket"] == "docs"
        assert kwargs["Key"] == "uploads/a.pdf"
        assert kwargs["Body"] == b"data"
        assert kwargs["ContentType"] == "application/pdf"
        assert "upload-date" in kwargs["Metadata"]
        assert stored.filename == "uploads/a.pdf"
        assert stored.url == "https://cdn.example.com/uploads/a.pdf"

    def test_no_public_url(self, monkeypatch):
        monkeypatch.delenv("R2_PUBLIC_URL", raising=False)
        stored = self._storage(MagicMock()).upload(b"data", "a.pdf", "application/pdf")
        assert stored.url is None

    def test_upload_error_propagates(self):
        client = MagicMock()
        client.put_object.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject"
        )
        with pytest.raises(ClientError):
            self._storage(client).upload(b"data", "a.pdf", "application/pdf")
        assert client.put_object.call_count == 1

    def test_delete_request(self):
        client = MagicMock()
        self._storage(client).delete("uploads/a.pdf")
        client.delete_object.assert_called_once_with(Bucket="docs", Key="uploads/a.pdf")

    def test_env_configuration(self, monkeypatch):
        monkeypatch.setenv("R2_ACCOUNT_ID", "acct")
        monkeypatch.setenv("R2_ACCESS_KEY_ID", "key-id")
        monkeypatch.setenv("R2_SECRET_ACCESS_KEY", "secret")
        monkeypatch.setenv("R2_BUCKET_NAME", "env-bucket")
        monkeypatch.setenv("R2_PUBLIC_URL", "https://cdn.example.com")
        storage = R2Storage(client=MagicMock())
        assert storage.bucket == "env-bucket"
        assert storage.url_for("uploads/a.pdf") == "https://cdn.example.com/uploads/a.pdf"

    def test_missing_credentials(self, monkeypatch):
        for var in ("R2_ACCOUNT_ID", "R2_ACCESS_KEY_ID", "R2_SECRET_ACCESS_KEY", "R2_BUCKET_NAME"):
            monkeypatch.delenv(var, raising=False)
        with pytest.raises(ValueError, match="R2_ACCOUNT_ID"):
            R2Storage()


class TestGetStorage:
    def test_default_local(self, monkeypatch, tmp_path):
        monkeypatch.delenv("STORAGE_PROVIDER", raising=False)
        storage = get_storage(StorageConfig(local_dir=str(tmp_path)))
        assert isinstance(storage, LocalStorage)
        assert storage.root == tmp_path

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("STORAGE_PROVIDER", "supabase")
        monkeypatch.setenv("SUPABASE_URL", "https://env.supabase.co")
        monkeypatch.setenv("SUPABASE_SERVICE_KEY", "env-key")
        storage = get_storage(StorageConfig(provider="local", supabase_bucket="b"))
        assert isinstance(storage, SupabaseStorage)
        assert storage.bucket == "b"

    def test_r2_provider(self, monkeypatch):
        monkeypatch.setenv("STORAGE_PROVIDER", "r2")
        monkeypatch.setenv("R2_ACCOUNT_ID", "acct")
        monkeypatch.setenv("R2_ACCESS_KEY_ID", "key-id")
        monkeypatch.setenv("R2_SECRET_ACCESS_KEY", "secret")
        monkeypatch.delenv("R2_PUBLIC_URL", raising=False)
        storage = get_storage(StorageConfig(r2_bucket="docs"))
        assert isinstance(storage, R2Storage)
        assert storage.bucket == "docs"

    def test_unknown_provider(self, monkeypatch):
        monkeypatch.delenv("STORAGE_PROVIDER", raising=False)
        with pytest.raises(ValueError, match="Unknown storage provider"):
            get_storage(StorageConfig(provider="ftp"))


class TestArtifactWriter:
    def test_write_sync(self, writer, local_storage):
        stored = writer.write_sync(_artifact())
        assert stored.filename == f"Jane_Resume_{UUID}.pdf"
        assert stored.display_name == "Jane_Resume.pdf"
        assert stored.size == len(b"%PDF-1.4 test")
        assert (local_storage.root / stored.filename).exists()

    async def test_write_and_delete(self, writer, local_storage):
        stored = await writer.write(_artifact(DocumentFormat.DOCX))
        assert stored.format is DocumentFormat.DOCX
        await writer.delete(stored)
        assert list(local_storage.root.iterdir()) == []

    def test_display_name_carried_from_artifact(self, writer):
        artifact = Artifact(
            filename="opaque-key.pdf",
            display_name="Jane_Resume.pdf",
            data=b"%PDF",
            kind=DocumentKind.RESUME,
            format=DocumentFormat.PDF,
        )
        assert writer.write_sync(artifact).display_name == "Jane_Resume.pdf"
