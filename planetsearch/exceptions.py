"""
PLANETSEARCH Custom Exceptions

Provides the domain-specific exception hierarchy for the planetary feature
search service. Callers can catch everything the service raises on purpose
with a single ``except PlanetSearchError`` clause.

Exception Hierarchy:
    PlanetSearchError (base)
    ├── ConfigurationError
    ├── DataSourceError
    │   └── SourceUnreadableError
    └── CatalogError
        └── BodyNotFoundError
"""

from typing import Any, Optional


class PlanetSearchError(Exception):
    """Base exception for all PLANETSEARCH errors.

    Attributes:
        message: Human-readable error description
        details: Optional dict with additional error context
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(PlanetSearchError):
    """Error in configuration file or settings.

    Raised when the configuration file is missing or unparsable, or when
    validation of its values fails.
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_file: Optional[str] = None,
    ) -> None:
        details = {}
        if config_key:
            details["config_key"] = config_key
        if config_file:
            details["config_file"] = config_file
        super().__init__(message, details)
        self.config_key = config_key
        self.config_file = config_file


# =============================================================================
# Data Source Errors
# =============================================================================

class DataSourceError(PlanetSearchError):
    """Base class for ingestion errors."""
    pass


class SourceUnreadableError(DataSourceError):
    """A body's tabular source could not be read or parsed.

    Raised by the loader on I/O failure or a stream-level parse error. A
    single malformed row never raises this.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        body_id: Optional[str] = None,
    ) -> None:
        details: dict[str, Any] = {}
        if body_id:
            details["body"] = body_id
        if path:
            details["path"] = path
        super().__init__(message, details)
        self.path = path
        self.body_id = body_id


# =============================================================================
# Catalog Errors
# =============================================================================

class CatalogError(PlanetSearchError):
    """Base class for catalog-related errors."""
    pass


class BodyNotFoundError(CatalogError):
    """No data is loaded for the requested celestial body."""

    def __init__(self, message: str, body_id: Optional[str] = None) -> None:
        details: dict[str, Any] = {}
        if body_id:
            details["body"] = body_id
        super().__init__(message, details)
        self.body_id = body_id


# =============================================================================
# Convenience aliases
# =============================================================================

Error = PlanetSearchError
