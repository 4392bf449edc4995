"""Composed pipelines: validate, generate data, set context, load for rendering."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from cv_tailor.config import AppConfig
from cv_tailor.models import (
    ApplicationData,
    ContextValidation,
    validate_tailor_context,
    validate_tailor_context_strict,
)
from cv_tailor.pipeline.assembly import (
    build_application_data,
    extract_context_summary,
    validate_application_data,
)
from cv_tailor.pipeline.files import (
    COMPANY_FILES,
    COVER_LETTER,
    JOB_ANALYSIS,
    METADATA,
    RESUME,
    CompanyFile,
    build_files_to_validate,
    display_name_for,
    validate_file_paths_exist,
)
from cv_tailor.pipeline.paths import PathResolutionInput, ResolvedPath, resolve_and_validate_path
from cv_tailor.pipeline.result import Err, Ok, Result, chain, chain_pipe, tap
from cv_tailor.pipeline.writers import write_data_module, write_tailor_context
from cv_tailor.pipeline.yaml_loader import (
    load_yaml_files,
    read_yaml,
    validate_loaded_files,
    validate_yaml_files_pipeline,
)

StageCallback = Callable[[str, str], None]


class ValidationType(str, Enum):
    ALL = "all"
    METADATA = "metadata"
    RESUME = "resume"
    JOB_ANALYSIS = "job-analysis"
    COVER_LETTER = "cover-letter"


VALIDATION_TYPE_MAP: dict[ValidationType, tuple[CompanyFile, ...]] = {
    ValidationType.ALL: COMPANY_FILES,
    ValidationType.METADATA: (METADATA,),
    ValidationType.RESUME: (RESUME,),
    ValidationType.JOB_ANALYSIS: (JOB_ANALYSIS,),
    ValidationType.COVER_LETTER: (COVER_LETTER,),
}


@dataclass(frozen=True)
class ValidationSummary:
    path: str
    validated_files: list[tuple[str, str]]  # (file name, display name)


@dataclass(frozen=True)
class GenerateDataSummary:
    company: str
    path: str
    output_path: str
    files: list[str]


@dataclass(frozen=True)
class SetContextSummary:
    company: str
    path: str
    template: str
    available_files: list[str]
    data_module: str
    context_file: str
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class LoadedApplication:
    company: str
    path: str
    data: ApplicationData


def _notifier(on_stage: StageCallback | None) -> StageCallback:
    def notify(stage: str, detail: str = "") -> None:
        if on_stage:
            on_stage(stage, detail)

    return notify


def _resolve_company(company: str, settings: AppConfig) -> Result[ResolvedPath]:
    return resolve_and_validate_path(
        PathResolutionInput(company_name=company),
        settings.paths.tailor_base_path,
    )


def _load_validated(
    resolved: ResolvedPath,
    allow_partial: bool,
    notify: StageCallback,
):
    """Existence -> load -> validate, reporting each stage."""
    return chain_pipe(
        build_files_to_validate(resolved.path),
        lambda files: tap(
            validate_file_paths_exist(files, allow_partial=allow_partial),
            lambda found: notify("files-confirmed-present", f"{len(found)} file(s)"),
        ),
        lambda found: tap(load_yaml_files(found), lambda _: notify("yaml-loaded", "")),
        lambda loaded: tap(
            validate_loaded_files(loaded),
            lambda _: notify("schema-validated", ""),
        ),
    )


def validate_tailor_files(
    options: PathResolutionInput,
    validation_type: ValidationType | str,
    settings: AppConfig,
) -> Result[ValidationSummary]:
    """Validate one file kind (or all of them) for a company or custom path."""
    kinds = VALIDATION_TYPE_MAP[ValidationType(validation_type)]

    def validate(resolved: ResolvedPath) -> Result[ValidationSummary]:
        files = build_files_to_validate(resolved.path, kinds)
        return chain(
            validate_yaml_files_pipeline(files),
            lambda validated: Ok(
                ValidationSummary(
                    path=resolved.path,
                    validated_files=[(f.file_name, display_name_for(f.file_name)) for f in validated],
                )
            ),
        )

    return chain(resolve_and_validate_path(options, settings.paths.tailor_base_path), validate)


def generate_application_data(
    company: str,
    settings: AppConfig,
    on_stage: StageCallback | None = None,
) -> Result[GenerateDataSummary]:
    """Validate every file of ``company`` and write the data module."""
    notify = _notifier(on_stage)
    output = settings.paths.generated_data_path

    def run(resolved: ResolvedPath) -> Result[GenerateDataSummary]:
        notify("path-resolved", resolved.path)
        return chain(
            _load_validated(resolved, False, notify),
            lambda files: chain_pipe(
                files,
                build_application_data,
                validate_application_data,
                lambda app: tap(Ok(app), lambda _: notify("assembled", "")),
                lambda app: write_data_module(app, company, output),
                lambda written: Ok(
                    GenerateDataSummary(
                        company=company,
                        path=resolved.path,
                        output_path=str(written),
                        files=[f.file_name for f in files],
                    )
                ),
            ),
        )

    return chain(_resolve_company(company, settings), run)


def set_tailor_context(
    company: str,
    settings: AppConfig,
    template: str | None = None,
    allow_partial: bool = False,
    on_stage: StageCallback | None = None,
) -> Result[SetContextSummary]:
    """Full run: validate, write the data module, then write the context file.

    The template comes from the argument, then ``metadata.active_template``,
    then the configured default. The context is validated fully when the
    job analysis was loaded; otherwise only its required fields are checked.
    """
    notify = _notifier(on_stage)
    paths = settings.paths

    def write_both(resolved: ResolvedPath, files) -> Result[SetContextSummary]:
        application = chain(build_application_data(files), validate_application_data)
        if not application.success:
            return application
        notify("assembled", "")

        written = write_data_module(application.data, company, paths.generated_data_path)
        if not written.success:
            return written
        notify("data-written", str(written.data))

        summary = extract_context_summary(company, resolved.path, files).data
        chosen = template or summary.template or settings.render.default_template
        context = write_tailor_context(
            summary,
            chosen,
            paths.context_file_path,
            full=summary.job_details is not None,
            root=paths.root,
        )
        if not context.success:
            return context
        notify("context-written", str(paths.context_file_path))

        return Ok(
            SetContextSummary(
                company=company,
                path=resolved.path,
                template=chosen,
                available_files=summary.available_files,
                data_module=str(written.data),
                context_file=str(paths.context_file_path),
                warnings=context.data,
            )
        )

    def run(resolved: ResolvedPath) -> Result[SetContextSummary]:
        notify("path-resolved", resolved.path)
        return chain(
            _load_validated(resolved, allow_partial, notify),
            lambda files: write_both(resolved, files),
        )

    return chain(_resolve_company(company, settings), run)


def load_application_data(
    options: PathResolutionInput,
    settings: AppConfig,
    allow_partial: bool = True,
) -> Result[LoadedApplication]:
    """In-memory run for rendering; nothing is written."""

    def run(resolved: ResolvedPath) -> Result[LoadedApplication]:
        return chain_pipe(
            build_files_to_validate(resolved.path),
            lambda files: validate_yaml_files_pipeline(files, allow_partial=allow_partial),
            build_application_data,
            validate_application_data,
            lambda app: Ok(
                LoadedApplication(company=resolved.company_name, path=resolved.path, data=app)
            ),
        )

    return chain(resolve_and_validate_path(options, settings.paths.tailor_base_path), run)


def check_tailor_context(
    settings: AppConfig,
    strict: bool = False,
    path: str | Path | None = None,
) -> Result[ContextValidation]:
    """Read the context file and run the layered validators on it.

    A context that fails validation is an ``Err`` carrying one error per
    line; warnings ride along on the ``Ok`` value.
    """
    context_path = Path(path) if path else settings.paths.context_file_path
    if not context_path.is_file():
        return Err(
            error=f"Tailor context not found: {context_path}",
            details="Run 'cv-tailor set-env -C <company>' first",
        )

    validator = validate_tailor_context_strict if strict else validate_tailor_context

    def check(raw) -> Result[ContextValidation]:
        checked = validator(raw, root=settings.paths.root)
        if not checked.success:
            return Err(
                error="Tailor context validation failed",
                details="\n".join(checked.errors),
                file_path=str(context_path),
            )
        return Ok(checked)

    return chain(read_yaml(context_path), check)
