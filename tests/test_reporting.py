"""Tests for terminal reporting."""

import json
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console

from cv_tailor.config import LoggingConfig
from cv_tailor.models import Metadata
from cv_tailor.pipeline.result import Err
from cv_tailor.reporting import Reporter, ReportOptions


def _reporter(**options) -> tuple[Reporter, Console]:
    console = Console(record=True, width=120, color_system=None)
    return Reporter(console, ReportOptions(emoji=False, **options)), console


def _validation_error() -> ValidationError:
    try:
        Metadata.model_validate({"company": "", "position": "x", "last_updated": "y"})
    except ValidationError as exc:
        return exc
    raise AssertionError("expected a validation error")


class TestReportOptions:
    def test_from_config(self):
        options = ReportOptions.from_config(LoggingConfig(level="warning", compact=True))
        assert options.level == "WARNING"
        assert options.compact

    def test_verbose_forces_debug(self):
        assert ReportOptions.from_config(LoggingConfig(), verbose=True).level == "DEBUG"


class TestReporter:
    def test_failure_prints_all_parts(self):
        reporter, console = _reporter()
        reporter.failure(Err("resume.yaml validation failed", details="  - name: bad", file_path="/x/resume.yaml"))
        text = console.export_text()
        assert "resume.yaml validation failed" in text
        assert "- name: bad" in text
        assert "/x/resume.yaml" in text

    def test_verbose_failure_lists_issues(self):
        """Verbose failures add a table of validation issues."""
        reporter, console = _reporter(verbose=True)
        exc = _validation_error()
        reporter.failure(Err("metadata.yaml validation failed", original_error=exc))
        text = console.export_text()
        assert "Validation issues" in text
        assert "company" in text

    def test_markup_in_details_is_literal(self):
        """Rich markup in error text is printed as is."""
        reporter, console = _reporter()
        reporter.failure(Err("bad", details="value [red]x[/red]"))
        assert "[red]x[/red]" in console.export_text()

    def test_compact_hides_stages(self):
        """Compact mode prints no stage lines."""
        reporter, console = _reporter(compact=True)
        reporter.stage("yaml-loaded")
        assert console.export_text() == ""

    def test_success_and_warnings(self):
        reporter, console = _reporter()
        reporter.success("Done", ["a", "b"])
        reporter.warnings(["careful"])
        text = console.export_text()
        assert "Done" in text
        assert "  - a" in text
        assert "careful" in text

    def test_json_payload(self):
        """Non-JSON values such as paths are written as strings."""
        reporter, console = _reporter()
        reporter.json({"path": Path("/x/tech-corp"), "files": ["resume.yaml"]})
        assert json.loads(console.export_text()) == {
            "path": "/x/tech-corp",
            "files": ["resume.yaml"],
        }
