"""Configuration management for crategraph using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_FILE_NAME = ".crategraph.json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"

    def to_logging(self) -> int:
        return {
            LogLevel.ERROR: logging.ERROR,
            LogLevel.WARN: logging.WARNING,
            LogLevel.INFO: logging.INFO,
            LogLevel.DEBUG: logging.DEBUG,
        }[self]


class RendererConfig(BaseModel):
    """External renderer configuration section."""
    executable: str = "dot"
    timeout_seconds: float = Field(alias="timeoutSeconds", default=30.0)

    @field_validator("executable")
    @classmethod
    def validate_executable(cls, v):
        if not v.strip():
            raise ValueError("executable must not be empty")
        return v

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got: {v}")
        return v

    model_config = ConfigDict(populate_by_name=True)


class OutputConfig(BaseModel):
    """Output configuration section."""
    file: str = "crate-graph.svg"


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN


class CrateGraphConfig(BaseModel):
    """Complete crategraph configuration model."""
    renderer: RendererConfig = Field(default_factory=RendererConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> CrateGraphConfig:
    """Load configuration, searching for .crategraph.json when no path is given.

    An explicitly named file must exist. A search that finds nothing yields
    the defaults.

    Raises:
        FileNotFoundError: If config_path is given but does not exist
        ValueError: If the file is not valid JSON or holds invalid settings
    """
    if config_path is not None:
        config_file = Path(config_path)
        if not config_file.is_file():
            raise FileNotFoundError(f"Config file not found: {config_file}")
    else:
        config_file = find_config_file()
        if config_file is None:
            return create_default_config()

    try:
        config_data = json.loads(config_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {config_file}: {e}")

    try:
        return CrateGraphConfig.model_validate(config_data)
    except ValidationError as e:
        raise ValueError(f"Failed to load config from {config_file}: {e}")


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Return the nearest .crategraph.json in start_dir or one of its parents."""
    start = Path(start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def create_default_config() -> CrateGraphConfig:
    """Create default configuration."""
    return CrateGraphConfig()
