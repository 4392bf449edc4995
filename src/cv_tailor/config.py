"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class PathsConfig:
    project_root: str = "."
    tailor_base: str = "resume-data/tailor"
    context_file: str = ".tailor/tailor-context.yaml"
    generated_data: str = "generated/application_data.py"
    output_dir: str = "tmp"

    @property
    def root(self) -> Path:
        return Path(self.project_root).expanduser().resolve()

    def resolve(self, relative: str) -> Path:
        path = Path(relative).expanduser()
        return path if path.is_absolute() else self.root / path

    @property
    def tailor_base_path(self) -> Path:
        return self.resolve(self.tailor_base)

    @property
    def context_file_path(self) -> Path:
        return self.resolve(self.context_file)

    @property
    def generated_data_path(self) -> Path:
        return self.resolve(self.generated_data)

    @property
    def output_dir_path(self) -> Path:
        return self.resolve(self.output_dir)


@dataclass(frozen=True)
class RenderConfig:
    default_template: str = "modern"


@dataclass(frozen=True)
class WatchConfig:
    debounce_ms: int = 300
    poll_interval: float = 0.5

    def __post_init__(self) -> None:
        if not 0 <= self.debounce_ms <= 60_000:
            raise ValueError(f"debounce_ms must be between 0 and 60000, got {self.debounce_ms}")
        if not 0.05 <= self.poll_interval <= 60:
            raise ValueError(f"poll_interval must be between 0.05 and 60, got {self.poll_interval}")


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    compact: bool = False
    timestamps: bool = True
    emoji: bool = True

    def __post_init__(self) -> None:
        if self.level.upper() not in LOG_LEVELS:
            raise ValueError(f"level must be one of {', '.join(LOG_LEVELS)}, got {self.level!r}")


@dataclass(frozen=True)
class AppConfig:
    paths: PathsConfig = field(default_factory=PathsConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    watch: WatchConfig = field(default_factory=WatchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _env_overrides(raw: dict) -> dict:
    """Apply FILE_WATCH_DEBOUNCE_MS / TAILOR_* environment variables on top of the file."""
    merged = {key: dict(value or {}) for key, value in raw.items()}

    debounce = os.environ.get("FILE_WATCH_DEBOUNCE_MS")
    if debounce:
        try:
            merged.setdefault("watch", {})["debounce_ms"] = int(debounce)
        except ValueError:
            raise ValueError(f"FILE_WATCH_DEBOUNCE_MS must be an integer, got {debounce!r}") from None

    compact = os.environ.get("TAILOR_COMPACT_LOGS")
    if compact:
        merged.setdefault("logging", {})["compact"] = compact.strip().lower() == "true"

    level = os.environ.get("TAILOR_LOG_LEVEL")
    if level:
        merged.setdefault("logging", {})["level"] = level.strip().upper()

    return merged


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults.

    Environment overrides are read from ``os.environ``; the CLI loads ``.env``
    before calling this.
    """
    if path is None:
        # Look for config.yaml relative to the project root
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    raw = _env_overrides(raw)

    return AppConfig(
        paths=PathsConfig(**raw.get("paths", {})),
        render=RenderConfig(**raw.get("render", {})),
        watch=WatchConfig(**raw.get("watch", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
    )
