"""
PLANETSEARCH Constants

Values shared between the application shell, the feature services and the
HTTP API.
"""

PLANETSEARCH_NAME = "PLANETSEARCH"
PLANETSEARCH_VERSION = "0.1.0"

# Environment variable prefix for configuration overrides
ENV_PREFIX = "PLANETSEARCH_"

# =============================================================================
# Data Sources
# =============================================================================

DEFAULT_DATA_DIR = "data"
DEFAULT_SOURCE_PATTERN = "*.csv"
DEFAULT_HEADER_SKIP = 0

# =============================================================================
# HTTP API
# =============================================================================

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
API_PREFIX = "/1"
DEFAULT_CORS_ORIGIN = "*"

# =============================================================================
# Longitude Conventions
# =============================================================================

FULL_CIRCLE_DEG = 360.0
HALF_CIRCLE_DEG = 180.0
