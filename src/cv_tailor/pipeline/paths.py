"""Resolve a company's data directory from ``-C`` (company) or ``-P`` (path).

Company names are joined onto the base directory as given. Normalization
(``normalize_company_name``) is the CLI's job and happens once, before the
pipeline is called.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from cv_tailor.pipeline.files import RECOGNIZED_FILE_NAMES
from cv_tailor.pipeline.result import Err, Ok, Result, chain, chain_pipe, try_catch

VALID_COMPANY_NAME = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


@dataclass(frozen=True)
class PathResolutionInput:
    company_name: str | None = None
    custom_path: str | None = None


@dataclass(frozen=True)
class ResolvedPath:
    path: str
    company_name: str  # from -C, or the last segment of -P
    base: str | None = None  # set only when resolved by company name


def company_path(company_name: str, base: str | Path) -> Path:
    return Path(base) / company_name


def normalize_company_name(name: str) -> str:
    """'Tech Corp' -> 'tech-corp'."""
    return re.sub(r"\s+", "-", name.strip().lower())


def is_valid_company_name(name: str) -> bool:
    return bool(VALID_COMPANY_NAME.match(name))


def list_available_companies(base: str | Path) -> list[str]:
    """Company folders under ``base`` holding at least one recognized data file."""
    base = Path(base)
    if not base.is_dir():
        return []
    try:
        return sorted(
            entry.name
            for entry in base.iterdir()
            if entry.is_dir() and any((entry / name).is_file() for name in RECOGNIZED_FILE_NAMES)
        )
    except OSError:
        return []


def validate_mutually_exclusive_options(
    options: PathResolutionInput,
) -> Result[PathResolutionInput]:
    """Exactly one of company name / custom path. No filesystem access."""

    def check() -> PathResolutionInput:
        if not options.company_name and not options.custom_path:
            raise ValueError("Either -C (company name) or -P (path) must be provided")
        if options.company_name and options.custom_path:
            raise ValueError("Cannot use both -C and -P options together")
        return options

    return try_catch(check, "Path option validation failed")


def resolve_path_string(options: PathResolutionInput, base: str | Path) -> Result[ResolvedPath]:
    def resolve() -> ResolvedPath:
        if options.company_name:
            return ResolvedPath(
                path=str(company_path(options.company_name, base)),
                company_name=options.company_name,
                base=str(base),
            )
        normalized = options.custom_path.rstrip("/\\") or options.custom_path
        return ResolvedPath(path=normalized, company_name=Path(normalized).name or "unknown")

    return try_catch(resolve, "Path resolution failed")


def validate_company_path(path: str | Path, base: str | Path) -> Result[Path]:
    """Company folder check with a "did you mean" list of sibling companies."""
    path, base = Path(path), Path(base)
    if path.is_dir():
        return Ok(path)
    if not base.is_dir():
        return Err(
            error=f"Tailor base directory not found: {base}",
            details="Create the base directory and add one folder per company",
        )
    companies = list_available_companies(base)
    return Err(
        error=f"Company folder not found: {path}",
        details=f"Available companies: {', '.join(companies) if companies else 'none'}",
    )


def validate_path_exists(resolved: ResolvedPath) -> Result[ResolvedPath]:
    if resolved.base is not None:
        return chain(validate_company_path(resolved.path, resolved.base), lambda _: Ok(resolved))
    if Path(resolved.path).is_dir():
        return Ok(resolved)
    return Err(
        error=f"Path not found: {resolved.path}",
        details="Ensure the company folder or custom path exists",
    )


def resolve_and_validate_path(
    options: PathResolutionInput,
    base: str | Path,
) -> Result[ResolvedPath]:
    """Option check -> path string -> existence, stopping at the first failure."""
    return chain_pipe(
        options,
        validate_mutually_exclusive_options,
        lambda opts: resolve_path_string(opts, base),
        validate_path_exists,
    )
