"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from resume_render.compose.blocks import (
    BulletListBlock,
    HeadingBlock,
    HeadingRole,
    KeyValueLine,
    ParagraphBlock,
)
from resume_render.compose.composer import compose_cover_letter, compose_resume
from resume_render.config import load_config
from resume_render.models.request import GenerationRequest
from resume_render.parsers.artifact_text import extract_file_text
from resume_render.pipeline.generator import BatchGenerationError, DocumentGenerator
from resume_render.storage.backends import LocalStorage, get_storage
from resume_render.storage.naming import strip_uuid
from resume_render.storage.writer import ArtifactWriter

app = typer.Typer(
    name="resume-render",
    help="Render résumé and cover-letter content into DOCX and PDF artifacts",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _load_request(job: Path) -> GenerationRequest:
    if not job.exists():
        console.print(f"[red]Job file not found: {job}[/red]")
        raise typer.Exit(1)
    try:
        return GenerationRequest.from_file(job)
    except (ValueError, ValidationError) as e:
        console.print(f"[red]Invalid job file {job}: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def render(
    job: Path = typer.Argument(help="JSON job file with identity, resume, coverLetter, options"),
    out_dir: Path = typer.Option(None, "--out-dir", "-o", help="Store artifacts in this directory"),
    resume_only: bool = typer.Option(False, "--resume-only", help="Skip the cover letter"),
    config_path: Path = typer.Option(None, "--config", help="config.yaml path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Render and store the documents of one application."""
    _setup_logging(verbose)
    request = _load_request(job)
    config = load_config(config_path)

    try:
        storage = LocalStorage(out_dir) if out_dir else get_storage(config.storage)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    generator = DocumentGenerator(ArtifactWriter(storage), font_path=config.pdf.font_path)
    cover_letter = None if resume_only else request.cover_letter

    with console.status("Rendering documents..."):
        try:
            result = asyncio.run(generator.generate_application(
                request.resume,
                cover_letter,
                request.identity,
                request.options,
            ))
        except BatchGenerationError as e:
            console.print(f"[red]Generation failed: {e}[/red]")
            for artifact in e.orphaned:
                console.print(f"  [yellow]left behind: {artifact.filename}[/yellow]")
            raise typer.Exit(1)

    table = Table(title=f"Artifacts ({storage.name})")
    table.add_column("Kind")
    table.add_column("Format")
    table.add_column("Stored as")
    table.add_column("Download name")
    table.add_column("Size", justify="right")
    for artifact in result.all():
        table.add_row(
            artifact.kind.value,
            artifact.format.value,
            artifact.url or artifact.filename,
            artifact.display_name,
            f"{artifact.size:,}",
        )
    console.print(table)
    console.print(f"[dim]Sections: {', '.join(result.metadata['sections']) or '-'}[/dim]")


@app.command()
def outline(
    job: Path = typer.Argument(help="JSON job file"),
) -> None:
    """Show the composed block sequence without rendering."""
    request = _load_request(job)
    documents = [compose_resume(request.resume, request.identity, request.options)]
    if request.cover_letter is not None:
        documents.append(compose_cover_letter(request.cover_letter, request.identity))

    for document in documents:
        tree = Tree(f"[bold]{document.kind.value}[/bold]")
        branch = tree
        for block in document.blocks:
            if isinstance(block, HeadingBlock) and block.role is HeadingRole.SECTION:
                branch = tree.add(f"[bold cyan]{escape(block.text.upper())}[/bold cyan]")
            elif isinstance(block, HeadingBlock):
                tree.add(f"[bold]{escape(block.text)}[/bold]")
            elif isinstance(block, KeyValueLine):
                branch.add(f"[bold]{escape(block.key)}:[/bold] {escape(block.value)}")
            elif isinstance(block, BulletListBlock):
                for item in block.items:
                    branch.add(f"• {escape(item)}")
            elif isinstance(block, ParagraphBlock):
                branch.add(f"[dim]{block.role.value}[/dim] {escape(block.text)}")
        console.print(tree)


@app.command()
def inspect(
    file: Path = typer.Argument(help="Rendered .docx or .pdf file"),
) -> None:
    """Print the text of a rendered artifact."""
    if not file.exists():
        console.print(f"[red]File not found: {file}[/red]")
        raise typer.Exit(1)
    try:
        text = extract_file_text(file)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print(f"[bold]{strip_uuid(file.name)}[/bold]")
    console.print(text, markup=False)


@app.command("display-name")
def display_name(
    filename: str = typer.Argument(help="Stored artifact filename or storage key"),
) -> None:
    """Print the human-facing download name of a stored artifact."""
    console.print(strip_uuid(filename), markup=False)


@app.command()
def storage_info(
    config_path: Path = typer.Option(None, "--config", help="config.yaml path"),
) -> None:
    """Show which storage backend is active."""
    config = load_config(config_path)
    try:
        storage = get_storage(config.storage)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print(f"Storage provider: [bold]{storage.name}[/bold]")
    if isinstance(storage, LocalStorage):
        console.print(f"Directory: {storage.root}")


if __name__ == "__main__":
    app()
