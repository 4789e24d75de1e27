"""
PLANETSEARCH Shared Type Definitions

Type aliases and small value types shared across the ingestion, search and
HTTP layers.

Usage:
    from planetsearch.types import GeoPosition, DataSource
"""

from pathlib import Path
from typing import NamedTuple, TypeAlias, Union


# =============================================================================
# Basic Type Aliases
# =============================================================================

# Numeric types for clarity
Degrees: TypeAlias = float
Kilometers: TypeAlias = float

# JSON-compatible types
JsonValue: TypeAlias = Union[str, int, float, bool, None, list["JsonValue"], dict[str, "JsonValue"]]
JsonDict: TypeAlias = dict[str, JsonValue]


# =============================================================================
# Coordinate Types
# =============================================================================

class GeoPosition(NamedTuple):
    """Planetary surface position in the canonical convention.

    Attributes:
        latitude: Latitude in decimal degrees, passed through from the source
        longitude: East-positive longitude in decimal degrees, (-180, 180]
    """
    latitude: Degrees
    longitude: Degrees


# =============================================================================
# Ingestion Types
# =============================================================================

class DataSource(NamedTuple):
    """One tabular source to ingest at startup.

    Attributes:
        body_id: Lowercase celestial body identifier (e.g. "mars")
        path: Location of the CSV file
        header_skip: Number of preamble lines before the header row
    """
    body_id: str
    path: Path
    header_skip: int = 0
