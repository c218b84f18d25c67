"""Section Composer: content objects -> ordered block sequence.

Both renderers consume the result, so every presence and ordering rule
lives here and nowhere else.
"""

from __future__ import annotations

import logging
from datetime import date

from resume_render.compose.blocks import (
    Align,
    BulletListBlock,
    ComposedDocument,
    DocumentBuilder,
    HeadingBlock,
    HeadingRole,
    KeyValueLine,
    ParagraphBlock,
    ParagraphRole,
    TextRun,
    paragraph,
)
from resume_render.models.artifact import DocumentKind
from resume_render.models.content import (
    CategorizedSkills,
    CoverLetterContent,
    EducationEntry,
    ExperienceEntry,
    FlatSkills,
    ResumeContent,
)
from resume_render.models.identity import Identity, RenderOptions

logger = logging.getLogger(__name__)

SEPARATOR = " | "
BULLET_SEPARATOR = " • "

DEFAULT_SALUTATION = "Dear Hiring Manager,"
DEFAULT_SIGNOFF = "Sincerely,"

SUMMARY_TITLE = "Professional Summary"
SKILLS_TITLE = "Skills"
EXPERIENCE_TITLE = "Professional Experience"
EDUCATION_TITLE = "Education"
CERTIFICATIONS_TITLE = "Certifications"
OTHER_TITLE = "Other"

_MONTHS = (
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
)


def format_letter_date(day: date) -> str:
    """``October 17, 2026`` regardless of process locale."""
    return f"{_MONTHS[day.month - 1]} {day.day}, {day.year}"


# ---------------------------------------------------------------------------
# Résumé
# ---------------------------------------------------------------------------

def compose_resume(
    content: ResumeContent,
    identity: Identity,
    options: RenderOptions | None = None,
) -> ComposedDocument:
    """Build the résumé block sequence in its fixed section order."""
    options = options or RenderOptions()
    doc = DocumentBuilder(DocumentKind.RESUME)

    doc.add(HeadingBlock(identity.full_name, HeadingRole.NAME, Align.CENTER))

    contact = identity.contact_parts()
    if contact:
        doc.add(paragraph(SEPARATOR.join(contact), ParagraphRole.CONTACT, Align.CENTER))

    links = identity.link_parts()
    if links:
        doc.add(paragraph(SEPARATOR.join(links), ParagraphRole.LINKS, Align.CENTER, link=True))

    if content.summary:
        doc.add_section(SUMMARY_TITLE, paragraph(content.summary))

    if content.skills:
        doc.add_section(SKILLS_TITLE, *_skills_blocks(content.skills))

    # Entries with no printable field contribute nothing, heading included
    blocks = [b for entry in content.experience for b in _experience_blocks(entry)]
    if blocks:
        doc.add_section(EXPERIENCE_TITLE, *blocks)

    blocks = [b for entry in content.education for b in _education_blocks(entry)]
    if blocks:
        doc.add_section(EDUCATION_TITLE, *blocks)

    if content.certifications:
        blocks = []
        if options.credly_profile_link:
            blocks.append(paragraph(
                f"Credly Profile: {options.credly_profile_link}",
                ParagraphRole.CREDLY,
                link=True,
            ))
        blocks.append(BulletListBlock(tuple(content.certifications)))
        doc.add_section(CERTIFICATIONS_TITLE, *blocks)

    if options.tags:
        doc.add_final_section(OTHER_TITLE, paragraph(BULLET_SEPARATOR.join(options.tags)))

    composed = doc.build()
    logger.debug(
        "Composed resume for %r: sections=%s",
        identity.full_name, composed.section_titles(),
    )
    return composed


def _skills_blocks(skills: CategorizedSkills | FlatSkills) -> list:
    if isinstance(skills, FlatSkills):
        # Legacy list: one paragraph, colons inside entries are not categories
        return [paragraph(BULLET_SEPARATOR.join(skills.items))]

    blocks: list = []
    for line in skills.lines():
        idx = line.find(":")
        if idx > 0:
            blocks.append(KeyValueLine(line[:idx].strip(), line[idx + 1:].strip()))
        else:
            blocks.append(paragraph(line))
    return blocks


def _experience_blocks(entry: ExperienceEntry) -> list:
    blocks: list = []
    title = _title_runs(entry.position, entry.company, SEPARATOR)
    if title:
        blocks.append(ParagraphBlock(title, ParagraphRole.ENTRY_TITLE))
    meta = SEPARATOR.join(p for p in (entry.location, entry.period) if p)
    if meta:
        blocks.append(paragraph(meta, ParagraphRole.ENTRY_META, italic=True))
    if entry.achievements:
        blocks.append(BulletListBlock(tuple(entry.achievements)))
    return blocks


def _education_blocks(entry: EducationEntry) -> list:
    blocks: list = []
    title = _title_runs(entry.degree, entry.institution, " - ")
    if title:
        blocks.append(ParagraphBlock(title, ParagraphRole.ENTRY_TITLE))
    meta = SEPARATOR.join(p for p in (entry.graduation, entry.details) if p)
    if meta:
        blocks.append(paragraph(meta, ParagraphRole.ENTRY_META, italic=True))
    return blocks


def _title_runs(lead: str | None, rest: str | None, sep: str) -> tuple[TextRun, ...]:
    """Bold lead plus plain ``sep rest``; whichever part is missing is dropped."""
    runs: list[TextRun] = []
    if lead:
        runs.append(TextRun(lead, bold=True))
    if rest:
        runs.append(TextRun(f"{sep}{rest}" if lead else rest))
    return tuple(runs)


# ---------------------------------------------------------------------------
# Cover letter
# ---------------------------------------------------------------------------

def compose_cover_letter(
    content: CoverLetterContent,
    identity: Identity,
    today: date | None = None,
) -> ComposedDocument:
    """Build the linear cover-letter block sequence."""
    today = today or date.today()
    doc = DocumentBuilder(DocumentKind.COVER_LETTER)

    doc.add(HeadingBlock(identity.full_name, HeadingRole.NAME, Align.LEFT))
    contact = identity.contact_parts()
    if contact:
        doc.add(paragraph(SEPARATOR.join(contact), ParagraphRole.CONTACT))
    doc.add(paragraph(format_letter_date(today), ParagraphRole.DATE))
    doc.add(paragraph(content.salutation or DEFAULT_SALUTATION, ParagraphRole.SALUTATION))
    for text in content.paragraphs():
        doc.add(paragraph(text))
    doc.add(paragraph(content.signoff or DEFAULT_SIGNOFF, ParagraphRole.SIGNOFF))
    doc.add(paragraph(identity.full_name, ParagraphRole.SIGNATURE))

    return doc.build()
