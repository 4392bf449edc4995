"""Tailor context document schema and its layered validators.

The context file records which company and template are active. Two
strictness levels exist:

- ``validate_tailor_context_strict`` checks only what is needed to find the
  data on disk and pick a template (PDF generation, watcher).
- ``validate_tailor_context`` also requires the job-analysis display fields.

Both run the same layers: schema, folder existence, theme registry, and
non-fatal business warnings.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, Field, ValidationError

from cv_tailor.models.common import NonEmptyStr


def _check_iso_datetime(value: str) -> str:
    if "T" not in value:
        raise ValueError("Must be valid ISO datetime")
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise ValueError("Must be valid ISO datetime") from None
    return value


IsoDatetime = Annotated[str, AfterValidator(_check_iso_datetime)]


class JobDetails(BaseModel):
    company: str
    location: str
    experience_level: str
    employment_type: str
    must_have_skills: list[str] = Field(default_factory=list)
    nice_to_have_skills: list[str] = Field(default_factory=list)
    team_context: str = ""


class TailorContextRequired(BaseModel):
    active_company: NonEmptyStr
    active_template: NonEmptyStr
    folder_path: NonEmptyStr
    available_files: list[NonEmptyStr]
    last_updated: IsoDatetime


class TailorContext(TailorContextRequired):
    company: NonEmptyStr
    position: NonEmptyStr
    primary_focus: NonEmptyStr
    job_details: JobDetails
    job_summary: str | None = Field(default=None, max_length=200)


@dataclass
class ContextValidation:
    success: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    data: TailorContextRequired | None = None


def validate_tailor_context(
    data: Any,
    *,
    root: Path | None = None,
    themes: Sequence[str] | None = None,
) -> ContextValidation:
    """Full validation: every field, including job-analysis display data."""
    return _validate(TailorContext, data, root=root, themes=themes, prefix="")


def validate_tailor_context_strict(
    data: Any,
    *,
    root: Path | None = None,
    themes: Sequence[str] | None = None,
) -> ContextValidation:
    """Required-fields-only validation. Schema errors are tagged CRITICAL."""
    return _validate(TailorContextRequired, data, root=root, themes=themes, prefix="CRITICAL: ")


def _validate(
    schema: type[TailorContextRequired],
    data: Any,
    *,
    root: Path | None,
    themes: Sequence[str] | None,
    prefix: str,
) -> ContextValidation:
    # Layer 1: schema
    try:
        context = schema.model_validate(data)
    except ValidationError as exc:
        errors = [
            f"{prefix}{'.'.join(str(p) for p in issue['loc']) or 'root'}: {issue['msg']}"
            for issue in exc.errors()
        ]
        return ContextValidation(success=False, errors=errors)

    errors: list[str] = []
    warnings: list[str] = []

    # Layer 2: file system
    folder = Path(context.folder_path)
    if not folder.is_absolute() and root is not None:
        folder = root / folder
    if not folder.is_dir():
        errors.append(f"Folder path does not exist: {context.folder_path}")

    # Layer 3: theme registry
    if themes is None:
        from cv_tailor.export.themes import AVAILABLE_THEMES

        themes = AVAILABLE_THEMES
    if context.active_template not in themes:
        errors.append(
            f"Template '{context.active_template}' not found. "
            f"Available themes: {', '.join(themes)}"
        )

    # Layer 4: business warnings
    if Path(context.folder_path).name != context.active_company:
        warnings.append(
            f"Folder path '{context.folder_path}' may not match "
            f"active company '{context.active_company}'"
        )
    if not context.available_files:
        warnings.append("available_files is empty; no data files were recorded")

    return ContextValidation(
        success=not errors,
        errors=errors,
        warnings=warnings,
        data=context,
    )
