"""Assemble validated fragments into ApplicationData and derive the context summary."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from cv_tailor.models import ApplicationData, JobAnalysis, JobDetails, Metadata
from cv_tailor.pipeline.files import FileToValidateWithYamlData
from cv_tailor.pipeline.result import Ok, Result, try_catch

JOB_SUMMARY_MAX = 100


@dataclass(frozen=True)
class ContextSummary:
    company: str
    path: str
    available_files: list[str]
    timestamp: str
    position: str | None = None
    primary_focus: str | None = None
    job_summary: str | None = None
    job_details: JobDetails | None = None
    template: str | None = None  # metadata.active_template, if set


def file_name_to_data_key(file_name: str) -> str:
    """'job_analysis.yaml' -> 'job_analysis'."""
    return Path(file_name).stem


def utc_timestamp(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_application_data(
    files: Sequence[FileToValidateWithYamlData],
) -> Result[ApplicationData]:
    """Missing fragments stay ``None``; that is never an error."""
    fragments = {file_name_to_data_key(f.file_name): f.data for f in files}
    return Ok(ApplicationData(**fragments))


def validate_application_data(application: ApplicationData) -> Result[ApplicationData]:
    """Re-validate the whole bundle from its serialized form."""
    return try_catch(
        lambda: ApplicationData.model_validate(application.model_dump(mode="json")),
        "Application data validation failed",
    )


def _fragment(files: Sequence[FileToValidateWithYamlData], key: str):
    for f in files:
        if file_name_to_data_key(f.file_name) == key:
            return f.data
    return None


def _job_details(job: JobAnalysis) -> JobDetails:
    return JobDetails(
        company=job.company,
        location=job.location,
        experience_level=job.experience_level,
        employment_type=job.employment_type,
        must_have_skills=[s.skill for s in job.requirements.must_have_skills],
        nice_to_have_skills=[s.skill for s in job.requirements.nice_to_have_skills],
        team_context=f"{job.role_context.department} ({job.role_context.team_size})",
    )


def _job_summary(metadata: Metadata | None, job: JobAnalysis | None) -> str | None:
    if metadata is not None and metadata.job_summary:
        summary = metadata.job_summary
    elif job is not None:
        summary = job.responsibilities.primary[0]
    else:
        return None
    if len(summary) > JOB_SUMMARY_MAX:
        summary = summary[: JOB_SUMMARY_MAX - 3].rstrip() + "..."
    return summary


def extract_context_summary(
    company: str,
    directory: str | Path,
    files: Sequence[FileToValidateWithYamlData],
    now: datetime | None = None,
) -> Result[ContextSummary]:
    """Summary for the context document.

    ``available_files`` lists the files actually loaded. Position and focus
    come from metadata; focus falls back to ``job_focus_used`` and then to
    the top-weighted job-analysis focus.
    """
    metadata: Metadata | None = _fragment(files, "metadata")
    job: JobAnalysis | None = _fragment(files, "job_analysis")

    position = metadata.position if metadata else (job.position if job else None)
    primary_focus = None
    if metadata is not None:
        primary_focus = metadata.primary_focus or metadata.job_focus_used
    if not primary_focus and job is not None:
        primary_focus = job.job_focus.describe()

    return Ok(
        ContextSummary(
            company=company,
            path=str(directory),
            available_files=[f.file_name for f in files],
            timestamp=utc_timestamp(now),
            position=position,
            primary_focus=primary_focus,
            job_summary=_job_summary(metadata, job),
            job_details=_job_details(job) if job is not None else None,
            template=metadata.active_template if metadata else None,
        )
    )
