"""Write generated artifacts: the application data module and the context file."""

from __future__ import annotations

import pprint
from pathlib import Path
from typing import Any

import yaml

from cv_tailor.models import ApplicationData, validate_tailor_context, validate_tailor_context_strict
from cv_tailor.pipeline.assembly import ContextSummary, utc_timestamp
from cv_tailor.pipeline.result import Err, Ok, Result, try_catch

DATA_MODULE_NAME = "APPLICATION_DATA"


def render_data_module(application: ApplicationData, company: str, generated_at: str) -> str:
    """Python source defining ``APPLICATION_DATA`` as a plain literal."""
    payload = application.model_dump(mode="json")
    header = [
        "# Generated application data. Do not edit by hand.",
        f"# Company: {company}",
        f"# Generated at: {generated_at}",
        "# Regenerate with: cv-tailor generate-data -C " + company,
        "",
    ]
    body = f"{DATA_MODULE_NAME} = {pprint.pformat(payload, sort_dicts=False, width=100)}\n"
    return "\n".join(header) + "\n" + body


def _write_text(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def write_data_module(
    application: ApplicationData,
    company: str,
    path: str | Path,
    generated_at: str | None = None,
) -> Result[Path]:
    """Overwrite ``path`` with the rendered module, creating parent directories."""
    source = render_data_module(application, company, generated_at or utc_timestamp())
    return try_catch(lambda: _write_text(Path(path), source), "Failed to write application data")


def build_tailor_context(summary: ContextSummary, template: str) -> dict[str, Any]:
    """Context record in document order. Unknown display fields stay ``None``."""
    return {
        "active_company": summary.company,
        "company": summary.company,
        "active_template": template,
        "folder_path": summary.path,
        "available_files": list(summary.available_files),
        "position": summary.position,
        "primary_focus": summary.primary_focus,
        "job_summary": summary.job_summary,
        "job_details": summary.job_details.model_dump() if summary.job_details else None,
        "last_updated": summary.timestamp,
    }


def render_context_document(context: dict[str, Any]) -> str:
    header = (
        "# Tailor context. Generated by cv-tailor set-env; do not edit by hand.\n"
        f"# Generated at: {context.get('last_updated')}\n"
        f"# Active company: {context.get('active_company')}\n\n"
    )
    return header + yaml.safe_dump(context, sort_keys=False, allow_unicode=True)


def write_tailor_context(
    summary: ContextSummary,
    template: str,
    path: str | Path,
    *,
    full: bool = False,
    root: Path | None = None,
) -> Result[list[str]]:
    """Validate the context record, then write it.

    Required fields are always checked. With ``full`` the job-analysis
    display fields are checked too. Warnings are returned on success and
    never block the write.
    """
    context = build_tailor_context(summary, template)

    checked = validate_tailor_context_strict(context, root=root)
    if checked.success and full:
        checked = validate_tailor_context(context, root=root)
    if not checked.success:
        return Err(
            error="Tailor context validation failed",
            details="\n".join(checked.errors),
            file_path=str(path),
        )

    written = try_catch(
        lambda: _write_text(Path(path), render_context_document(context)),
        "Failed to write tailor context",
    )
    if not written.success:
        return written
    return Ok(checked.warnings)
