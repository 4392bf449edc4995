"""Load company YAML files and validate them against their schemas."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError

from cv_tailor.pipeline.files import (
    FileToValidate,
    FileToValidateWithYamlData,
    validate_file_paths_exist,
)
from cv_tailor.pipeline.result import Err, Ok, Result, chain, chain_pipe, map_results, try_catch


@dataclass(frozen=True)
class Issue:
    path: str
    message: str
    received: Any


def read_yaml(path: str | Path) -> Result[Any]:
    """Read then parse. Read and parse failures carry different error tags."""
    return chain(
        try_catch(lambda: Path(path).read_text(encoding="utf-8"), f"Failed to read {path}"),
        lambda content: try_catch(lambda: yaml.safe_load(content), "Invalid YAML"),
    )


def extract_payload(raw: Any, wrapper_key: str | None) -> Any:
    """Unwrap ``raw[wrapper_key]`` if present and truthy, else return ``raw`` as is."""
    if wrapper_key and isinstance(raw, dict):
        return raw.get(wrapper_key) or raw
    return raw


def load_yaml_files(
    files: Sequence[FileToValidate],
) -> Result[list[FileToValidateWithYamlData]]:
    def load(file: FileToValidate) -> Result[FileToValidateWithYamlData]:
        return chain(
            read_yaml(file.path),
            lambda raw: Ok(
                FileToValidateWithYamlData(
                    file_name=file.file_name,
                    path=file.path,
                    schema=file.schema,
                    wrapper_key=file.wrapper_key,
                    data=extract_payload(raw, file.wrapper_key),
                )
            ),
        )

    return map_results(files, load)


def _issue_path(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "root"


def format_validation_error(error: ValidationError) -> str:
    """One ``  - path: message`` line per issue."""
    return "\n".join(
        f"  - {_issue_path(issue['loc'])}: {issue['msg']}" for issue in error.errors()
    )


def describe_issues(error: ValidationError) -> list[Issue]:
    """Structured issues including the offending input value."""
    return [
        Issue(path=_issue_path(issue["loc"]), message=issue["msg"], received=issue.get("input"))
        for issue in error.errors()
    ]


def validate_schema(
    schema: type[BaseModel],
    data: Any,
    name: str,
    file_path: str,
) -> Result[BaseModel]:
    try:
        return Ok(schema.model_validate(data))
    except ValidationError as exc:
        return Err(
            error=f"{name} validation failed",
            details=format_validation_error(exc),
            original_error=exc,
            file_path=file_path,
        )


def validate_loaded_files(
    files: Sequence[FileToValidateWithYamlData],
) -> Result[list[FileToValidateWithYamlData]]:
    """Replace each file's raw data with the validated model."""
    return map_results(
        files,
        lambda file: chain(
            validate_schema(file.schema, file.data, file.file_name, file.path),
            lambda model: Ok(replace(file, data=model)),
        ),
    )


def validate_yaml_files_pipeline(
    files: Sequence[FileToValidate],
    allow_partial: bool = False,
) -> Result[list[FileToValidateWithYamlData]]:
    """Existence -> load -> validate."""
    return chain_pipe(
        files,
        lambda fs: validate_file_paths_exist(fs, allow_partial=allow_partial),
        load_yaml_files,
        validate_loaded_files,
    )
