"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (ARCHSCAN__SECTION__KEY)
3. Project YAML (archscan.yaml in the working directory)
4. Global YAML (~/.config/archscan/config.yaml)
5. Built-in defaults (this file)

Examples:
    ARCHSCAN__LOGGING__LEVEL=DEBUG
    ARCHSCAN__SCAN__MAX_WORKERS=4
    ARCHSCAN__OUTPUT__DIRECTORY=/tmp/archscan
"""

import re
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

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
        ARCHSCAN__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every enumerated file.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class OutputConfig(BaseModel):
    """Where the cache and the report are written.

    Relative paths resolve against the working directory, not the scan root.
    """

    directory: str = Field(default="out", description="Output directory.")
    cache_file: str = Field(
        default="scan-cache.json",
        description="Cache file name inside the output directory. Delete it to force a rescan.",
    )
    report_file: str = Field(
        default="sw-architecture-report.html",
        description="HTML report file name inside the output directory.",
    )

    @property
    def cache_path(self) -> Path:
        return Path(self.directory) / self.cache_file

    @property
    def report_path(self) -> Path:
        return Path(self.directory) / self.report_file


class ScanConfig(BaseModel):
    """Discovery and scan configuration.

    Env vars:
        ARCHSCAN__SCAN__MAX_WORKERS: Concurrent file reads
        ARCHSCAN__SCAN__TRACK_USAGES: Also build the usage index
    """

    include_globs: list[str] = Field(
        default_factory=lambda: ["**/*.php", "**/*.js", "**/*.ts"],
        description="Files to scan (gitignore-style globs, relative to the scan root).",
    )
    exclude_globs: list[str] = Field(
        default_factory=lambda: ["**/*.spec.js", "**/*.spec.ts"],
        description="Files to skip even if included.",
    )
    respect_gitignore: bool = Field(
        default=True,
        description="Honor .gitignore files found in the scanned tree.",
    )
    max_workers: int = Field(
        default=8,
        description="Thread pool size for file reads. Parsing stays on one thread.",
    )
    track_usages: bool = Field(
        default=True,
        description="Collect qualified-name references into the usage index.",
    )

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_workers must be >= 1, got {v}")
        return v


class MarkersConfig(BaseModel):
    """Tokens and patterns mined from comments and attributes."""

    package_attribute: str = Field(
        default="Package",
        description="Attribute name whose first string argument is the domain tag.",
    )
    class_internal_tokens: list[str] = Field(default_factory=lambda: ["@internal"])
    script_internal_tokens: list[str] = Field(default_factory=lambda: ["@internal", "@private"])
    final_token: str = "@final"
    package_comment_pattern: str = Field(
        default=r"@sw-package ([a-zA-Z-@]+)",
        description="Regex applied to script comments; group 1 is the domain tag.",
    )

    @field_validator("package_attribute")
    @classmethod
    def validate_package_attribute(cls, v: str) -> str:
        # Interpolated into a tree-sitter query string
        if not re.fullmatch(r"[A-Za-z_][A-Za-z0-9_]*", v):
            raise ValueError(f"package_attribute must be a plain identifier, got {v!r}")
        return v

    @field_validator("package_comment_pattern")
    @classmethod
    def validate_package_comment_pattern(cls, v: str) -> str:
        try:
            compiled = re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid regex: {e}") from e
        if compiled.groups < 1:
            raise ValueError("package_comment_pattern needs one capture group")
        return v


class ArchScanConfig(BaseModel):
    """Root configuration (for type hints)."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)
    markers: MarkersConfig = Field(default_factory=MarkersConfig)
