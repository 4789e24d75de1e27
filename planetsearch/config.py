"""
PLANETSEARCH Configuration

Pydantic models for every configurable part of the service, loaded from a
YAML file with environment variable overrides.

Resolution order (later wins):
    1. Model defaults
    2. YAML file (explicit path, or the first file found by get_config_paths)
    3. Environment variables named PLANETSEARCH_<SECTION>_<KEY>,
       e.g. PLANETSEARCH_SERVER_PORT=8080 or PLANETSEARCH_LOG_LEVEL=DEBUG

Usage:
    from planetsearch.config import load_config

    config = load_config("planetsearch.yaml")
    print(config.server.port)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal, Optional, get_origin

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from planetsearch.constants import (
    DEFAULT_CORS_ORIGIN,
    DEFAULT_DATA_DIR,
    DEFAULT_HEADER_SKIP,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_SOURCE_PATTERN,
    ENV_PREFIX,
)
from planetsearch.exceptions import ConfigurationError
from planetsearch.logging_config import get_logger

__all__ = [
    "ServerConfig",
    "DataConfig",
    "SearchConfig",
    "PlanetSearchConfig",
    "get_config_paths",
    "load_config",
]

logger = get_logger(__name__)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# =============================================================================
# Section Models
# =============================================================================


class ServerConfig(BaseModel):
    """HTTP listener settings."""

    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    cors_origin: str = DEFAULT_CORS_ORIGIN


class DataConfig(BaseModel):
    """Where the per-body gazetteer files live and how to read them."""

    directory: str = DEFAULT_DATA_DIR
    pattern: str = DEFAULT_SOURCE_PATTERN
    default_header_skip: int = Field(default=DEFAULT_HEADER_SKIP, ge=0)
    header_skip: dict[str, int] = Field(default_factory=dict)

    @field_validator("header_skip")
    @classmethod
    def _normalize_header_skip(cls, value: dict[str, int]) -> dict[str, int]:
        normalized = {}
        for body, skip in value.items():
            if skip < 0:
                raise ValueError(f"header_skip for {body!r} must be >= 0")
            normalized[body.strip().lower()] = skip
        return normalized

    def header_skip_for(self, body_id: str) -> int:
        """Number of preamble lines to skip for one body's source."""
        return self.header_skip.get(body_id.lower(), self.default_header_skip)


class SearchConfig(BaseModel):
    """Search service behaviour."""

    # Drop records whose coordinate system is unrecognized instead of
    # returning their longitude unconverted.
    strict_coordinates: bool = False
    cache_size: int = Field(default=256, ge=0)


class PlanetSearchConfig(BaseModel):
    """Top-level PLANETSEARCH configuration."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    data: DataConfig = Field(default_factory=DataConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    log_level: LogLevel = "INFO"
    log_file: Optional[str] = None

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value


# Sections that accept PLANETSEARCH_<SECTION>_<KEY> overrides
_SECTIONS: dict[str, type[BaseModel]] = {
    "server": ServerConfig,
    "data": DataConfig,
    "search": SearchConfig,
}

# Top-level scalar keys that accept PLANETSEARCH_<KEY> overrides
_TOP_LEVEL_KEYS = ("log_level", "log_file")


# =============================================================================
# Loading
# =============================================================================


def get_config_paths() -> list[Path]:
    """Candidate configuration files, in search order.

    Returns:
        Paths from $PLANETSEARCH_CONFIG, the working directory and the
        user's config directory. Paths may not exist.
    """
    paths = []
    env_path = os.environ.get(f"{ENV_PREFIX}CONFIG")
    if env_path:
        paths.append(Path(env_path))
    paths.append(Path.cwd() / "planetsearch.yaml")
    paths.append(Path.home() / ".config" / "planetsearch" / "config.yaml")
    return paths


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in configuration file: {e}", config_file=str(path)
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read configuration file: {e}", config_file=str(path)
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Configuration file must contain a mapping", config_file=str(path)
        )
    return data


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay PLANETSEARCH_* environment variables onto raw config data.

    Values stay strings; pydantic coerces them to the field types.
    """
    for section, model in _SECTIONS.items():
        for key, field in model.model_fields.items():
            if get_origin(field.annotation) is dict:
                continue
            env_name = f"{ENV_PREFIX}{section}_{key}".upper()
            if env_name in os.environ:
                section_data = data.get(section)
                if section_data is None:
                    section_data = data[section] = {}
                elif not isinstance(section_data, dict):
                    # Leave a malformed section for validation to report
                    continue
                section_data[key] = os.environ[env_name]
                logger.debug(f"Config override from {env_name}")

    for key in _TOP_LEVEL_KEYS:
        env_name = f"{ENV_PREFIX}{key}".upper()
        if env_name in os.environ:
            data[key] = os.environ[env_name]
            logger.debug(f"Config override from {env_name}")

    return data


def load_config(config_path: Optional[str | Path] = None) -> PlanetSearchConfig:
    """Load and validate configuration.

    Args:
        config_path: Explicit YAML file. When omitted, the first existing
            file from get_config_paths() is used, or defaults if none exist.

    Returns:
        Validated PlanetSearchConfig

    Raises:
        ConfigurationError: If the explicit file is missing, the YAML is
            invalid, or validation fails.
    """
    data: dict[str, Any] = {}
    source: Optional[Path] = None

    if config_path is not None:
        source = Path(config_path)
        if not source.exists():
            raise ConfigurationError(
                f"Configuration file not found: {source}", config_file=str(source)
            )
    else:
        for candidate in get_config_paths():
            if candidate.exists():
                source = candidate
                break

    if source is not None:
        data = _read_yaml(source)
        logger.debug(f"Loaded configuration from {source}")

    data = _apply_env_overrides(data)

    try:
        return PlanetSearchConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed: {e}",
            config_file=str(source) if source else None,
        ) from e
