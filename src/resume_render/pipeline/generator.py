"""Document generator: compose once, render twice, store every artifact."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from resume_render.compose.blocks import ComposedDocument
from resume_render.compose.composer import compose_cover_letter, compose_resume
from resume_render.export.docx_renderer import render_docx
from resume_render.export.pdf_renderer import render_pdf
from resume_render.models.artifact import (
    Artifact,
    DocumentFormat,
    DocumentKind,
    StoredArtifact,
)
from resume_render.models.content import CoverLetterContent, ResumeContent
from resume_render.models.identity import Identity, RenderOptions
from resume_render.storage.naming import artifact_filename, display_name_for
from resume_render.storage.writer import ArtifactWriter

logger = logging.getLogger(__name__)


class BatchGenerationError(Exception):
    """One or more artifacts of a generation batch failed.

    ``errors`` holds the underlying exceptions. ``orphaned`` lists sibling
    artifacts that were written but could not be removed afterwards.
    """

    def __init__(self, errors: list[BaseException], orphaned: list[StoredArtifact]):
        self.errors = errors
        self.orphaned = orphaned
        summary = "; ".join(f"{type(e).__name__}: {e}" for e in errors)
        super().__init__(f"{len(errors)} artifact(s) failed: {summary}")


@dataclass
class DocumentPair:
    """Flow and fixed-page artifacts of one document."""

    docx: StoredArtifact
    pdf: StoredArtifact


@dataclass
class ApplicationArtifacts:
    """All artifacts of one application, as handed to the persistence layer."""

    resume: DocumentPair
    cover_letter: DocumentPair | None = None
    metadata: dict = field(default_factory=dict)

    def all(self) -> list[StoredArtifact]:
        items = [self.resume.docx, self.resume.pdf]
        if self.cover_letter is not None:
            items += [self.cover_letter.docx, self.cover_letter.pdf]
        return items


class DocumentGenerator:
    """Stateless between calls; every call composes and names afresh."""

    def __init__(self, writer: ArtifactWriter, *, font_path: str | Path | None = None):
        self.writer = writer
        self.font_path = font_path

    # -- pure rendering ---------------------------------------------------

    def render(
        self,
        document: ComposedDocument,
        fmt: DocumentFormat,
        subject: str,
    ) -> Artifact:
        if fmt is DocumentFormat.DOCX:
            data = render_docx(document)
        else:
            data = render_pdf(document, font_path=self.font_path)
        return Artifact(
            filename=artifact_filename(subject, document.kind, fmt),
            display_name=display_name_for(subject, document.kind, fmt),
            data=data,
            kind=document.kind,
            format=fmt,
        )

    def render_resume(
        self,
        content: ResumeContent,
        identity: Identity,
        options: RenderOptions | None = None,
    ) -> tuple[Artifact, Artifact]:
        """Render the résumé as (docx, pdf) from a single composition."""
        document = compose_resume(content, identity, options)
        return (
            self.render(document, DocumentFormat.DOCX, identity.full_name),
            self.render(document, DocumentFormat.PDF, identity.full_name),
        )

    def render_cover_letter(
        self,
        content: CoverLetterContent,
        identity: Identity,
        today: date | None = None,
    ) -> tuple[Artifact, Artifact]:
        document = compose_cover_letter(content, identity, today)
        return (
            self.render(document, DocumentFormat.DOCX, identity.full_name),
            self.render(document, DocumentFormat.PDF, identity.full_name),
        )

    # -- render + store -----------------------------------------------------

    async def _produce(
        self,
        document: ComposedDocument,
        fmt: DocumentFormat,
        subject: str,
    ) -> StoredArtifact:
        artifact = await asyncio.to_thread(self.render, document, fmt, subject)
        return await self.writer.write(artifact)

    async def _run_batch(
        self,
        jobs: list[tuple[ComposedDocument, DocumentFormat]],
        subject: str,
    ) -> list[StoredArtifact]:
        """Fan out every job, fan in; all-or-nothing with compensating cleanup."""
        results = await asyncio.gather(
            *(self._produce(doc, fmt, subject) for doc, fmt in jobs),
            return_exceptions=True,
        )
        errors = [r for r in results if isinstance(r, BaseException)]
        if not errors:
            return list(results)

        written = [r for r in results if isinstance(r, StoredArtifact)]
        logger.error("Generation batch failed (%d error(s)); removing %d written artifact(s)",
                     len(errors), len(written))
        orphaned = await self._cleanup(written)
        raise BatchGenerationError(errors, orphaned) from errors[0]

    async def _cleanup(self, written: list[StoredArtifact]) -> list[StoredArtifact]:
        outcomes = await asyncio.gather(
            *(self.writer.delete(a) for a in written),
            return_exceptions=True,
        )
        orphaned = []
        for artifact, outcome in zip(written, outcomes):
            if isinstance(outcome, BaseException):
                logger.warning("Could not remove orphaned artifact %s: %s",
                               artifact.filename, outcome)
                orphaned.append(artifact)
        return orphaned

    async def generate_resume(
        self,
        content: ResumeContent,
        identity: Identity,
        options: RenderOptions | None = None,
    ) -> DocumentPair:
        document = compose_resume(content, identity, options)
        docx, pdf = await self._run_batch(
            [(document, DocumentFormat.DOCX), (document, DocumentFormat.PDF)],
            identity.full_name,
        )
        return DocumentPair(docx=docx, pdf=pdf)

    async def generate_cover_letter(
        self,
        content: CoverLetterContent,
        identity: Identity,
        today: date | None = None,
    ) -> DocumentPair:
        document = compose_cover_letter(content, identity, today)
        docx, pdf = await self._run_batch(
            [(document, DocumentFormat.DOCX), (document, DocumentFormat.PDF)],
            identity.full_name,
        )
        return DocumentPair(docx=docx, pdf=pdf)

    async def generate_application(
        self,
        resume: ResumeContent,
        cover_letter: CoverLetterContent | None,
        identity: Identity,
        options: RenderOptions | None = None,
        *,
        today: date | None = None,
    ) -> ApplicationArtifacts:
        """Generate résumé and cover-letter artifacts as one batch.

        Args:
            resume: Résumé content from the generator.
            cover_letter: Cover-letter content, or None for a résumé only.
            identity: Subject of the documents.
            options: Credly link and tags for the résumé.
            today: Date printed on the cover letter (defaults to today).

        Raises:
            BatchGenerationError: if any artifact failed. Siblings that were
                already written are deleted before this is raised.
        """
        jobs = []
        resume_doc = compose_resume(resume, identity, options)
        jobs += [(resume_doc, DocumentFormat.DOCX), (resume_doc, DocumentFormat.PDF)]
        if cover_letter is not None:
            letter_doc = compose_cover_letter(cover_letter, identity, today)
            jobs += [(letter_doc, DocumentFormat.DOCX), (letter_doc, DocumentFormat.PDF)]

        stored = await self._run_batch(jobs, identity.full_name)

        result = ApplicationArtifacts(
            resume=DocumentPair(docx=stored[0], pdf=stored[1]),
            metadata={"sections": resume_doc.section_titles()},
        )
        if cover_letter is not None:
            result.cover_letter = DocumentPair(docx=stored[2], pdf=stored[3])
        return result
