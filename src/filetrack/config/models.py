"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (FILETRACK__SECTION__KEY)
3. Repo YAML (.filetrack.yaml)
4. Global YAML (~/.config/filetrack/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    FILETRACK__<SECTION>__<KEY>=<VALUE>

Examples:
    FILETRACK__LOGGING__LEVEL=DEBUG
    FILETRACK__TRACKER__BUILD_DIR=_site
    FILETRACK__WATCH__DEBOUNCE_MS=500
"""

import re
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from filetrack.core.excludes import DEFAULT_BUILD_DIR, DEFAULT_IGNORE_PATTERNS

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        FILETRACK__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs one event per tracked file.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class TrackerConfig(BaseModel):
    """File tracking configuration.

    Env vars:
        FILETRACK__TRACKER__BUILD_DIR: Build output directory, ignored automatically
    """

    build_dir: str = Field(
        default=DEFAULT_BUILD_DIR,
        description="Build output directory relative to the project root. "
        "An ignore rule for it is appended when tracking starts.",
    )
    ignore_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS),
        description="Regular expressions searched against root-relative paths. "
        "Replacing this list drops the built-in rules; prefer extra_ignore_patterns.",
    )
    extra_ignore_patterns: list[str] = Field(
        default_factory=list,
        description="Additional ignore regexes appended after ignore_patterns.",
    )

    @field_validator("ignore_patterns", "extra_ignore_patterns")
    @classmethod
    def validate_patterns(cls, v: list[str]) -> list[str]:
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid ignore pattern {pattern!r}: {e}") from e
        return v

    @field_validator("build_dir")
    @classmethod
    def validate_build_dir(cls, v: str) -> str:
        if not v.strip().strip("/"):
            raise ValueError("build_dir must name a directory")
        if Path(v).is_absolute():
            raise ValueError(f"build_dir must be relative to the project root: {v}")
        return v

    @property
    def all_ignore_patterns(self) -> list[str]:
        return [*self.ignore_patterns, *self.extra_ignore_patterns]


class WatchConfig(BaseModel):
    """Watch driver configuration.

    Env vars:
        FILETRACK__WATCH__DEBOUNCE_MS: Quiet window before a batch is delivered
        FILETRACK__WATCH__STEP_MS: How often the watcher checks for changes
        FILETRACK__WATCH__FORCE_POLLING: Use polling instead of native notifications
    """

    debounce_ms: int = Field(
        default=300,
        description="Changes are grouped until no new change arrives for this long.",
    )
    step_ms: int = Field(
        default=50,
        description="Watcher check interval. Lower values use more CPU.",
    )
    force_polling: bool | None = Field(
        default=None,
        description="Force polling (network mounts, WSL /mnt/*). None lets watchfiles decide.",
    )

    @field_validator("debounce_ms", "step_ms")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"Must be positive, got {v}")
        return v


class FileTrackConfig(BaseModel):
    """Root configuration for filetrack.

    All settings can be configured via:
    1. Environment variables: FILETRACK__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    tracker: TrackerConfig = Field(default_factory=TrackerConfig)
    watch: WatchConfig = Field(default_factory=WatchConfig)
