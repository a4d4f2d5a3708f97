"""Configuration management with Pydantic validation.

Provides type-safe configuration with:
- Pydantic models for validation
- Optional YAML file (read-only, never written back)
- Defaults matching the plain ``nmcli`` workflow
"""

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================


class BackendConfig(BaseModel):
    """NetworkManager backend configuration."""

    nmcli_path: str = Field("nmcli", min_length=1, description="nmcli command or absolute path")
    rescan: bool = Field(False, description="Request a fresh scan before listing")
    timeout: float | None = Field(None, gt=0, description="Seconds per nmcli call (None=no limit)")


class DisplayConfig(BaseModel):
    """Network list presentation."""

    max_networks: int = Field(5, ge=1, le=20, description="Entries shown in the short-list")
    color: bool = Field(True, description="Use ANSI colors on a terminal")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("WARNING", description="Log level")
    format: str = Field("simple", description="Format: simple, structured")
    file: str | None = Field(None, description="Log file path")
    max_size_mb: int = Field(10, ge=1, description="Max log file size")
    backup_count: int = Field(3, ge=0, description="Number of backup files")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Accept standard level names in any case."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in ("simple", "structured"):
            raise ValueError("format must be 'simple' or 'structured'")
        return v


class Config(BaseModel):
    """Root configuration model."""

    backend: BackendConfig = Field(default_factory=BackendConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# Loading
# =============================================================================


def default_config_path() -> Path:
    """Location of the per-user config file.

    Returns:
        ``$XDG_CONFIG_HOME/wifi-select/config.yaml`` (``~/.config`` fallback)
    """
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / "wifi-select" / "config.yaml"


def load_config(config_path: str | Path | None = None) -> Config:
    """Load and validate configuration.

    A missing file yields defaults. Unlike a daemon config, nothing is
    written back: the CLI never creates files on its own.

    Args:
        config_path: YAML file to read (default: per-user config path)

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If the file cannot be parsed or fails validation
    """
    path = Path(config_path).expanduser() if config_path else default_config_path()

    if not path.exists():
        logger.debug("Config file %s not found, using defaults", path)
        return Config()

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Cannot read config file {path}", details={"error": e}, cause=e
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    try:
        config = Config.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid config file {path}",
            details={"errors": e.error_count()},
            cause=e,
        ) from e

    logger.debug("Loaded config from %s", path)
    return config
