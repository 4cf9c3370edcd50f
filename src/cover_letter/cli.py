"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from cover_letter.clients.llm_client import LLMClient
from cover_letter.config import AppConfig, load_config
from cover_letter.errors import CoverLetterError
from cover_letter.models.profile import ResumeProfile
from cover_letter.parsers.source_text import load_source_text
from cover_letter.pipeline.cover_letter import build_profile_context
from cover_letter.pipeline.orchestrator import CoverLetterPipeline
from cover_letter.pipeline.resume_parser import ResumeParser
from cover_letter.providers.classifier import classify
from cover_letter.providers.registry import build_default_registry, matches_key_format
from cover_letter.store.profile_store import ProfileStore

app = typer.Typer(
    name="cover-letter",
    help="Generate a tailored cover letter PDF from a job posting and your resume.",
    no_args_is_help=True,
)
console = Console()

API_KEY_ENV = "COVER_LETTER_API_KEY"

CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Path to config.yaml")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _fail(message: str) -> None:
    console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(1)


def _load_config(path: Path | None) -> AppConfig:
    try:
        return load_config(path)
    except (CoverLetterError, TypeError, yaml.YAMLError) as e:
        _fail(f"Invalid config: {e}")


def _load_stored_profile(store: ProfileStore) -> ResumeProfile | None:
    try:
        return store.get_profile()
    except ValidationError as e:
        _fail(f"Stored resume profile is corrupted, run `cover-letter parse-resume` again: {e}")


def _store(config: AppConfig) -> ProfileStore:
    return ProfileStore(config.storage.resolved_db_path)


def _resolve_api_key(explicit: str | None, store: ProfileStore) -> str | None:
    return explicit or store.get_api_key()


@app.command()
def generate(
    job: Path = typer.Option(None, "--job", "-j", help="Job description file (TXT/MD/PDF/DOCX)"),
    text: str = typer.Option(None, "--text", help="Job description text"),
    profile_path: Path = typer.Option(None, "--profile", help="Resume profile JSON (defaults to stored)"),
    api_key: str = typer.Option(None, "--api-key", envvar=API_KEY_ENV, help="Provider API key"),
    provider: str = typer.Option(None, "--provider", "-p", help="Provider id (skips key detection)"),
    model: str = typer.Option(None, "--model", "-m", help="Model override"),
    output_dir: Path = typer.Option(None, "--output-dir", "-o", help="Where to write the PDF"),
    config_path: Path = CONFIG_OPTION,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Write a cover letter for a job posting and save it as PDF."""
    _setup_logging(verbose)
    config = _load_config(config_path)

    if job is not None:
        if not job.exists():
            _fail(f"Job description file not found: {job}")
        try:
            job_text = load_source_text(job)
        except ValueError as e:
            _fail(str(e))
    elif text:
        job_text = text
    else:
        _fail("Provide the job description with --job or --text.")

    store = _store(config)
    if profile_path is not None:
        try:
            profile = ResumeProfile.model_validate_json(profile_path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            _fail(f"Could not load profile {profile_path}: {e}")
    else:
        profile = _load_stored_profile(store)

    llm = LLMClient(timeout=config.llm.timeout)
    pipeline = CoverLetterPipeline(
        llm,
        provider=provider or config.llm.provider,
        model=model or config.llm.model,
        geometry=config.page,
        extraction_temperature=config.llm.extraction_temperature,
        letter_temperature=config.llm.letter_temperature,
    )

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Generating cover letter...", total=None)

        def on_phase(phase: str, detail: str) -> None:
            progress.update(task, description=detail)

        try:
            result = asyncio.run(
                pipeline.run(
                    job_text,
                    profile,
                    _resolve_api_key(api_key, store),
                    on_phase=on_phase,
                )
            )
        except CoverLetterError as e:
            progress.stop()
            _fail(str(e))

    directory = output_dir or config.output.resolved_directory
    directory.mkdir(parents=True, exist_ok=True)
    output = directory / result.filename
    output.write_bytes(result.pdf_bytes)

    console.print(
        Panel(
            result.letter,
            title=f"{result.job_info.company} - {result.job_info.role}",
        )
    )
    console.print(
        f"[green]Saved {output} ({result.document.page_count} page(s), "
        f"{result.elapsed_seconds:.1f}s)[/green]"
    )


@app.command()
def providers() -> None:
    """List supported providers."""
    table = Table(title="Providers")
    table.add_column("id", style="bold")
    table.add_column("name")
    table.add_column("default model")
    for summary in build_default_registry().list():
        table.add_row(summary.id, summary.display_name, summary.default_model)
    console.print(table)


@app.command()
def detect(api_key: str = typer.Argument(help="API key to classify")) -> None:
    """Show which provider an API key would be sent to."""
    registry = build_default_registry()
    descriptor = registry.require(classify(api_key))
    console.print(f"[bold]{descriptor.id}[/bold]: {descriptor.display_name}")
    if not matches_key_format(descriptor, api_key):
        console.print("[yellow]Key does not look like a typical key for this provider.[/yellow]")


@app.command("set-key")
def set_key(
    api_key: str = typer.Argument(help="Provider API key"),
    config_path: Path = CONFIG_OPTION,
) -> None:
    """Store the API key (provider is detected from its format)."""
    key = api_key.strip()
    if len(key) < 10:
        _fail("API key is too short.")
    _store(_load_config(config_path)).set_api_key(key)
    descriptor = build_default_registry().require(classify(key))
    console.print(f"[green]API key saved (detected: {descriptor.display_name}).[/green]")


@app.command("parse-resume")
def parse_resume(
    file: Path = typer.Argument(help="Resume file (PDF/DOCX/TXT/MD)"),
    api_key: str = typer.Option(None, "--api-key", envvar=API_KEY_ENV, help="Provider API key"),
    provider: str = typer.Option(None, "--provider", "-p", help="Provider id (skips key detection)"),
    model: str = typer.Option(None, "--model", "-m", help="Model override"),
    config_path: Path = CONFIG_OPTION,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Extract a structured profile from a resume and store it."""
    _setup_logging(verbose)
    if not file.exists():
        _fail(f"Resume file not found: {file}")

    config = _load_config(config_path)
    store = _store(config)
    key = _resolve_api_key(api_key, store)
    if not key:
        _fail("API key missing. Set it with `cover-letter set-key`.")

    try:
        resume_text = load_source_text(file)
    except ValueError as e:
        _fail(str(e))

    parser = ResumeParser(
        LLMClient(timeout=config.llm.timeout),
        provider=provider or config.llm.provider,
        model=model or config.llm.model,
    )
    try:
        with console.status("Parsing resume..."):
            profile = asyncio.run(parser.parse(resume_text, key))
    except CoverLetterError as e:
        _fail(str(e))

    store.set_profile(profile)
    console.print(f"[green]Resume parsed and saved. Found: {profile.name}[/green]")


@app.command("show-profile")
def show_profile(
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
    config_path: Path = CONFIG_OPTION,
) -> None:
    """Print the stored resume profile."""
    profile = _load_stored_profile(_store(_load_config(config_path)))
    if profile is None:
        _fail("No resume stored. Run `cover-letter parse-resume` first.")
    if as_json:
        console.print_json(json.dumps(profile.model_dump()))
    else:
        console.print(Panel(build_profile_context(profile), title=profile.name))


if __name__ == "__main__":
    app()
