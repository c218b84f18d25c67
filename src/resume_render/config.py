"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass(frozen=True)
class StorageConfig:
    provider: str = "local"  # "local" | "supabase" | "r2"
    local_dir: str = "./uploads"
    public_base_url: str | None = None
    supabase_bucket: str | None = None  # falls back to SUPABASE_BUCKET, then "resumes"
    r2_bucket: str | None = None  # falls back to R2_BUCKET_NAME
    timeout: float = 30.0

    @property
    def resolved_local_dir(self) -> Path:
        return Path(self.local_dir).expanduser()


@dataclass(frozen=True)
class PdfConfig:
    font_path: str | None = None  # TTF for full Unicode; Helvetica otherwise


@dataclass(frozen=True)
class AppConfig:
    storage: StorageConfig = field(default_factory=StorageConfig)
    pdf: PdfConfig = field(default_factory=PdfConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        storage=StorageConfig(**raw.get("storage", {})),
        pdf=PdfConfig(**raw.get("pdf", {})),
    )
