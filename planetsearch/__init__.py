"""
PLANETSEARCH - Planetary Surface Feature Search Service

Looks up named surface features (craters, montes, valles, ...) on planets
and moons by approximate name, returning each feature's position in a
single canonical longitude convention together with its size and origin.

Architecture:
    - Ingestion: one CSV gazetteer per body, loaded once at startup
    - Normalization: per-row coordinate systems mapped to east-positive
      longitudes in (-180, 180]
    - Search: fuzzy subsequence matching ranked by contiguity and position
    - Serving: thin aiohttp JSON API over an immutable in-memory catalog
"""

__version__ = "0.1.0"
__author__ = "PLANETSEARCH contributors"

# Version tuple for programmatic comparison
VERSION_INFO = (0, 1, 0)

# Core exceptions (import base class for convenience)
from planetsearch.exceptions import PlanetSearchError

# Core constants (import commonly used constants for convenience)
from planetsearch.constants import (
    PLANETSEARCH_VERSION,
    PLANETSEARCH_NAME,
)

# Core types (import commonly used types for convenience)
from planetsearch.types import (
    DataSource,
    GeoPosition,
)
