"""Terminal output for pipeline results and logging setup."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cv_tailor.config import LoggingConfig
from cv_tailor.pipeline.result import Err
from cv_tailor.pipeline.yaml_loader import describe_issues


@dataclass(frozen=True)
class ReportOptions:
    level: str = "INFO"
    compact: bool = False
    timestamps: bool = True
    emoji: bool = True
    verbose: bool = False

    @classmethod
    def from_config(cls, config: LoggingConfig, verbose: bool = False) -> ReportOptions:
        return cls(
            level="DEBUG" if verbose else config.level.upper(),
            compact=config.compact,
            timestamps=config.timestamps,
            emoji=config.emoji,
            verbose=verbose,
        )


def configure_logging(options: ReportOptions, console: Console | None = None) -> None:
    handler = RichHandler(
        console=console,
        show_time=options.timestamps and not options.compact,
        show_path=options.verbose,
        markup=False,
        rich_tracebacks=options.verbose,
    )
    logging.basicConfig(
        level=options.level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )


class Reporter:
    """Prints stage progress, successes and failures to a rich console."""

    def __init__(self, console: Console | None = None, options: ReportOptions | None = None):
        self.console = console or Console()
        self.options = options or ReportOptions()

    def _icon(self, icon: str) -> str:
        return f"{icon} " if self.options.emoji else ""

    def stage(self, stage: str, detail: str = "") -> None:
        if self.options.compact and not self.options.verbose:
            return
        text = f"[dim]{self._icon('·')}{stage}"
        if detail:
            text += f": {escape(detail)}"
        self.console.print(text + "[/dim]")

    def success(self, message: str, lines: list[str] | None = None) -> None:
        self.console.print(f"[green]{self._icon('✅')}{escape(message)}[/green]")
        if lines and not self.options.compact:
            for line in lines:
                self.console.print(f"  - {escape(line)}")

    def warnings(self, warnings: list[str]) -> None:
        for warning in warnings:
            self.console.print(f"[yellow]{self._icon('⚠️')}{escape(warning)}[/yellow]")

    def failure(self, err: Err, verbose: bool | None = None) -> None:
        verbose = self.options.verbose if verbose is None else verbose
        body = escape(err.error)
        if err.details:
            body += "\n\n" + escape(err.details)
        if err.file_path:
            body += f"\n\n[dim]File: {escape(err.file_path)}[/dim]"
        self.console.print(Panel(body, title=f"{self._icon('❌')}Error", border_style="red"))

        if verbose and isinstance(err.original_error, ValidationError):
            table = Table(title="Validation issues", show_lines=False)
            table.add_column("Path", style="cyan")
            table.add_column("Message")
            table.add_column("Received", style="dim")
            for issue in describe_issues(err.original_error):
                table.add_row(escape(issue.path), escape(issue.message), escape(_preview(issue.received)))
            self.console.print(table)

    def json(self, payload: Any) -> None:
        self.console.print_json(json.dumps(payload, default=str))


def _preview(value: Any, limit: int = 60) -> str:
    text = repr(value)
    return text if len(text) <= limit else text[: limit - 3] + "..."
