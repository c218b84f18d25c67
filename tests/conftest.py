"""Shared test fixtures."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

from resume_render.models.content import CoverLetterContent, ResumeContent
from resume_render.models.identity import Identity, RenderOptions
from resume_render.storage.backends import LocalStorage
from resume_render.storage.writer import ArtifactWriter


@pytest.fixture
def jane_identity() -> Identity:
    return Identity(full_name="Jane O'Brien", email="jane@x.com")


@pytest.fixture
def jane_resume() -> ResumeContent:
    return ResumeContent(
        summary="Experienced engineer.",
        skills="Languages: Go, Rust",
        experience=[],
        education=[],
        certifications=[],
    )


@pytest.fixture
def jane_options() -> RenderOptions:
    return RenderOptions(tags=["Fluent in French"])


@pytest.fixture
def full_identity() -> Identity:
    return Identity(
        full_name="Alex Kim",
        email="alex@example.com",
        phone_number="+1 555 0100",
        address="Berlin, Germany",
        linkedin_profile="https://linkedin.com/in/alexkim",
        github_link="https://github.com/alexkim",
    )


@pytest.fixture
def full_resume() -> ResumeContent:
    return ResumeContent.model_validate({
        "summary": "Backend engineer with eight years of distributed systems work.",
        "skills": (
            "Programming Languages: Python, Go, Kotlin\n"
            "\n"
            "Cloud: AWS, GCP\n"
            "Strong written communication\n"
        ),
        "experience": [
            {
                "position": "Senior Engineer",
                "company": "Acme Corp",
                "location": "Berlin",
                "period": "2021 - Present",
                "achievements": [
                    "Cut p99 latency by 40% by redesigning the cache layer",
                    "Led migration of 30 services to Kubernetes",
                ],
            },
            {
                "position": "Engineer",
                "company": "Initech",
                "achievements": ["Built the billing pipeline"],
            },
        ],
        "education": [
            {"degree": "BSc Computer Science", "institution": "TU Berlin", "graduation": "2016"},
            {"degree": "Exchange Semester", "institution": "KTH"},
        ],
        "certifications": ["AWS Solutions Architect", "CKA"],
    })


@pytest.fixture
def full_options() -> RenderOptions:
    return RenderOptions(
        credly_profile_link="https://credly.com/users/alexkim",
        tags=["Open source maintainer", "Marathon runner"],
    )


@pytest.fixture
def cover_letter() -> CoverLetterContent:
    return CoverLetterContent.model_validate({
        "salutation": "Dear Ms. Rivera,",
        "opening": "I am excited to apply for the Staff Engineer role.",
        "body": "At Acme I led the redesign of our caching layer.",
        "companyFit": "Your focus on reliability matches how I work.",
        "closing": "I would welcome the chance to talk.",
        "signoff": "Best regards,",
    })


@pytest.fixture
def letter_date() -> date:
    return date(2026, 10, 17)


@pytest.fixture
def local_storage(tmp_path) -> LocalStorage:
    return LocalStorage(tmp_path / "uploads")


@pytest.fixture
def writer(local_storage) -> ArtifactWriter:
    return ArtifactWriter(local_storage)


@pytest.fixture
def job_file(tmp_path) -> Path:
    """A CLI job file in the generator's camelCase shape."""
    path = tmp_path / "job.json"
    path.write_text(json.dumps({
        "identity": {"fullName": "Jane O'Brien", "email": "jane@x.com"},
        "resume": {
            "summary": "Experienced engineer.",
            "skills": "Languages: Go, Rust",
            "experience": [],
            "education": [],
            "certifications": [],
        },
        "coverLetter": {"opening": "Hello there.", "closing": "Thanks for reading."},
        "options": {"tags": ["Fluent in French"]},
    }), encoding="utf-8")
    return path
