"""Tests for the typer CLI."""

from __future__ import annotations

from typer.testing import CliRunner

from resume_render.cli import app

runner = CliRunner()

UUID = "3f2b8c1e-9a4d-4e6f-8b2a-1c0d9e8f7a6b"


def test_display_name():
    result = runner.invoke(app, ["display-name", f"uploads/Jane_OBrien_Resume_{UUID}.pdf"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "Jane_OBrien_Resume.pdf"


def test_outline(job_file):
    result = runner.invoke(app, ["outline", str(job_file)])
    assert result.exit_code == 0
    assert "PROFESSIONAL SUMMARY" in result.stdout
    assert "Languages:" in result.stdout
    assert "Fluent in French" in result.stdout


def test_render_to_directory(job_file, tmp_path, monkeypatch):
    monkeypatch.delenv("STORAGE_PROVIDER", raising=False)
    out_dir = tmp_path / "out"
    result = runner.invoke(app, ["render", str(job_file), "--out-dir", str(out_dir)])
    assert result.exit_code == 0, result.stdout
    files = sorted(p.name for p in out_dir.iterdir())
    assert len(files) == 4
    assert sum(f.startswith("Jane_OBrien_Resume_") for f in files) == 2
    assert sum(f.startswith("Jane_OBrien_Cover_Letter_") for f in files) == 2


def test_render_resume_only(job_file, tmp_path):
    out_dir = tmp_path / "out"
    result = runner.invoke(
        app, ["render", str(job_file), "--out-dir", str(out_dir), "--resume-only"]
    )
    assert result.exit_code == 0, result.stdout
    assert len(list(out_dir.iterdir())) == 2


def test_render_missing_job(tmp_path):
    result = runner.invoke(app, ["render", str(tmp_path / "missing.json")])
    assert result.exit_code == 1
    assert "Job file not found" in result.stdout


def test_inspect(job_file, tmp_path):
    out_dir = tmp_path / "out"
    runner.invoke(app, ["render", str(job_file), "--out-dir", str(out_dir), "--resume-only"])
    pdf = next(out_dir.glob("*.pdf"))
    result = runner.invoke(app, ["inspect", str(pdf)])
    assert result.exit_code == 0
    assert "Jane_OBrien_Resume.pdf" in result.stdout
    assert "Experienced engineer." in result.stdout


def test_inspect_unsupported(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello")
    result = runner.invoke(app, ["inspect", str(path)])
    assert result.exit_code == 1
