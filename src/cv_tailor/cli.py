"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from cv_tailor.config import AppConfig, load_config
from cv_tailor.export import AVAILABLE_THEMES, write_pdf
from cv_tailor.pipeline.orchestrator import (
    ValidationType,
    check_tailor_context,
    generate_application_data,
    load_application_data,
    set_tailor_context,
    validate_tailor_files,
)
from cv_tailor.pipeline.paths import (
    PathResolutionInput,
    is_valid_company_name,
    list_available_companies,
    normalize_company_name,
)
from cv_tailor.pipeline.result import Err, chain, map_results, try_catch
from cv_tailor.reporting import Reporter, ReportOptions, configure_logging
from cv_tailor.watcher import TailorWatcher

app = typer.Typer(
    name="cv-tailor",
    help="Validate company-specific resume data and generate application documents",
    no_args_is_help=True,
)
console = Console()


class Document(str, Enum):
    RESUME = "resume"
    COVER_LETTER = "cover-letter"
    BOTH = "both"


def _setup(verbose: bool = False, config: Path | None = None) -> tuple[AppConfig, Reporter]:
    try:
        settings = load_config(config)
    except (ValueError, TypeError) as exc:
        console.print(f"[red]Invalid configuration: {exc}[/red]")
        raise typer.Exit(1)
    options = ReportOptions.from_config(settings.logging, verbose=verbose)
    configure_logging(options, console)
    return settings, Reporter(console, options)


def _fail(reporter: Reporter, err: Err) -> None:
    reporter.failure(err)
    raise typer.Exit(1)


def _company(name: str) -> str:
    """Normalize a -C value once, before it reaches the pipeline."""
    normalized = normalize_company_name(name)
    if normalized != name:
        console.print(f"[dim]Using company name '{normalized}'[/dim]")
    if not is_valid_company_name(normalized):
        console.print(
            f"[yellow]Company name '{normalized}' is not kebab-case "
            "(lowercase letters, digits and single hyphens)[/yellow]"
        )
    return normalized


def _path_input(company: str | None, path: str | None) -> PathResolutionInput:
    return PathResolutionInput(
        company_name=_company(company) if company else None,
        custom_path=path,
    )


@app.command("set-env")
def set_env(
    company: str = typer.Option(..., "--company", "-C", help="Company folder name"),
    template: str = typer.Option(None, "--template", "-t", help="Theme for rendered documents"),
    allow_partial: bool = typer.Option(
        False, "--allow-partial", help="Continue with the files that exist"
    ),
    config: Path = typer.Option(None, "--config", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show every stage"),
) -> None:
    """Validate a company's data, write the data module and the tailor context."""
    settings, reporter = _setup(verbose, config)
    name = _company(company)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(f"Setting up {name}...", total=None)

        def on_stage(stage: str, detail: str) -> None:
            progress.update(task, description=f"{stage} {detail}".strip())
            if verbose:
                reporter.stage(stage, detail)

        result = set_tailor_context(
            name, settings, template=template, allow_partial=allow_partial, on_stage=on_stage
        )

    if not result.success:
        _fail(reporter, result)

    summary = result.data
    reporter.success(
        f"Tailor context set to {summary.company} (template: {summary.template})",
        [
            f"Data: {summary.path}",
            f"Files: {', '.join(summary.available_files)}",
            f"Generated: {summary.data_module}",
            f"Context: {summary.context_file}",
        ],
    )
    reporter.warnings(summary.warnings)


@app.command("generate-data")
def generate_data(
    company: str = typer.Option(..., "--company", "-C", help="Company folder name"),
    config: Path = typer.Option(None, "--config", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show every stage"),
) -> None:
    """Validate a company's data and write the application data module."""
    settings, reporter = _setup(verbose, config)
    result = generate_application_data(
        _company(company), settings, on_stage=reporter.stage if verbose else None
    )
    if not result.success:
        _fail(reporter, result)
    reporter.success(
        f"Application data generated for {result.data.company}",
        [f"Output: {result.data.output_path}", f"Files: {', '.join(result.data.files)}"],
    )


@app.command()
def validate(
    validation_type: ValidationType = typer.Argument(
        ValidationType.ALL, help="Which file to validate"
    ),
    company: str = typer.Option(None, "--company", "-C", help="Company folder name"),
    path: str = typer.Option(None, "--path", "-P", help="Custom data directory"),
    config: Path = typer.Option(None, "--config", help="Path to config.yaml"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show every validation issue"),
) -> None:
    """Validate company YAML files without writing anything."""
    settings, reporter = _setup(verbose, config)
    result = validate_tailor_files(_path_input(company, path), validation_type, settings)
    if not result.success:
        _fail(reporter, result)
    if as_json:
        reporter.json({
            "path": result.data.path,
            "validated_files": [
                {"file": file_name, "name": display}
                for file_name, display in result.data.validated_files
            ],
        })
        return
    reporter.success(
        f"Validation passed for {result.data.path}",
        [f"{display} ({file_name})" for file_name, display in result.data.validated_files],
    )


@app.command("check-context")
def check_context(
    strict: bool = typer.Option(False, "--strict", help="Check only the required fields"),
    config: Path = typer.Option(None, "--config", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Validate the tailor context file."""
    settings, reporter = _setup(verbose, config)
    result = check_tailor_context(settings, strict=strict)
    if not result.success:
        _fail(reporter, result)
    context = result.data.data
    reporter.success(
        f"Tailor context is valid ({'required fields' if strict else 'full'})",
        [
            f"Active company: {context.active_company}",
            f"Template: {context.active_template}",
            f"Folder: {context.folder_path}",
        ],
    )
    reporter.warnings(result.data.warnings)


@app.command("generate-pdf")
def generate_pdf(
    company: str = typer.Option(None, "--company", "-C", help="Company folder name"),
    path: str = typer.Option(None, "--path", "-P", help="Custom data directory"),
    document: Document = typer.Option(Document.BOTH, "--document", "-d", help="Document to render"),
    theme: str = typer.Option(None, "--theme", help="Theme name"),
    output_dir: Path = typer.Option(None, "--output-dir", "-o", help="Output directory"),
    config: Path = typer.Option(None, "--config", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Render the resume and/or cover letter to PDF.

    Without -C or -P the active company from the tailor context is used.
    """
    settings, reporter = _setup(verbose, config)
    options = _path_input(company, path)

    if not company and not path:
        context = check_tailor_context(settings, strict=True)
        if not context.success:
            _fail(reporter, context)
        active = context.data.data
        options = PathResolutionInput(company_name=active.active_company)
        theme = theme or active.active_template

    theme = theme or settings.render.default_template
    out = output_dir or settings.paths.output_dir_path
    documents = ["resume", "cover-letter"] if document is Document.BOTH else [document.value]

    result = chain(
        load_application_data(options, settings, allow_partial=True),
        lambda loaded: map_results(
            documents,
            lambda doc: try_catch(
                lambda: write_pdf(loaded.data, loaded.company, out, doc, theme),
                f"Failed to render {doc}",
            ),
        ),
    )
    if not result.success:
        _fail(reporter, result)
    reporter.success(f"Rendered with theme '{theme}'", [str(p) for p in result.data])


@app.command()
def watch(
    config: Path = typer.Option(None, "--config", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Regenerate application data whenever a company YAML file changes."""
    settings, _ = _setup(verbose, config)
    watcher = TailorWatcher(settings)
    try:
        asyncio.run(watcher.watch())
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped watching[/dim]")


@app.command()
def themes() -> None:
    """List available themes."""
    for name in AVAILABLE_THEMES:
        console.print(f"  - {name}")


@app.command()
def companies(
    config: Path = typer.Option(None, "--config", help="Path to config.yaml"),
) -> None:
    """List company folders that hold data files."""
    settings, _ = _setup(False, config)
    found = list_available_companies(settings.paths.tailor_base_path)
    if not found:
        console.print(f"[yellow]No companies under {settings.paths.tailor_base_path}[/yellow]")
        return
    for name in found:
        console.print(f"  - {name}")


if __name__ == "__main__":
    app()
