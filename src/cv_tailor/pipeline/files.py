"""Company data files: registry, descriptors and existence checks."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from cv_tailor.models import CoverLetter, JobAnalysis, Metadata, Resume
from cv_tailor.pipeline.result import Err, Ok, Result


@dataclass(frozen=True)
class CompanyFile:
    """Static description of one recognized data file."""

    key: str
    file_name: str
    schema: type[BaseModel]
    wrapper_key: str | None
    display_name: str


METADATA = CompanyFile("metadata", "metadata.yaml", Metadata, None, "Metadata")
JOB_ANALYSIS = CompanyFile("job-analysis", "job_analysis.yaml", JobAnalysis, "job_analysis", "Job analysis")
RESUME = CompanyFile("resume", "resume.yaml", Resume, "resume", "Resume")
COVER_LETTER = CompanyFile("cover-letter", "cover_letter.yaml", CoverLetter, "cover_letter", "Cover letter")

COMPANY_FILES: tuple[CompanyFile, ...] = (METADATA, JOB_ANALYSIS, RESUME, COVER_LETTER)
RECOGNIZED_FILE_NAMES: tuple[str, ...] = tuple(f.file_name for f in COMPANY_FILES)


def display_name_for(file_name: str) -> str:
    for company_file in COMPANY_FILES:
        if company_file.file_name == file_name:
            return company_file.display_name
    return file_name


@dataclass(frozen=True)
class FileToValidate:
    file_name: str
    path: str
    schema: type[BaseModel]
    wrapper_key: str | None


@dataclass(frozen=True)
class FileToValidateWithYamlData(FileToValidate):
    data: Any = None


def build_files_to_validate(
    directory: str | Path,
    files: Iterable[CompanyFile] = COMPANY_FILES,
) -> list[FileToValidate]:
    """Descriptors for ``files`` inside ``directory``, in registry order."""
    directory = Path(directory)
    return [
        FileToValidate(
            file_name=f.file_name,
            path=str(directory / f.file_name),
            schema=f.schema,
            wrapper_key=f.wrapper_key,
        )
        for f in files
    ]


def validate_file_paths_exist(
    files: Sequence[FileToValidate],
    allow_partial: bool = False,
) -> Result[list[FileToValidate]]:
    """Check every descriptor's path.

    With ``allow_partial`` the present files are passed on; it fails only
    when none of the requested files exist.
    """
    found = [f for f in files if Path(f.path).is_file()]
    missing = [f for f in files if not Path(f.path).is_file()]

    if not missing:
        return Ok(list(files))

    directory = Path(files[0].path).parent if files else Path(".")
    # Everything recognized in the folder, not only the files asked for
    present = [name for name in RECOGNIZED_FILE_NAMES if (directory / name).is_file()]
    expected_names = [f.file_name for f in files]
    lines = [
        *(f"  - {f.file_name}" for f in missing),
        f"Expected files: {', '.join(expected_names)}",
        f"Found files: {', '.join(present) if present else 'none'}",
    ]

    if not present:
        return Err(
            error=f"No recognized files found in {directory}",
            details="\n".join(
                [f"Missing {len(missing)} of {len(files)} expected file(s):", *lines]
            ),
        )

    if allow_partial and found:
        return Ok(found)

    return Err(
        error=f"Missing {len(missing)} required file(s):",
        details="\n".join(lines),
    )
