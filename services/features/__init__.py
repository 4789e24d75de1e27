"""
PLANETSEARCH Feature Services

Gazetteer ingestion, coordinate normalization and fuzzy name search for
planetary surface features.
"""

from .coordinates import (
    CoordinateSystem,
    normalize,
)
from .fuzzy import (
    FuzzyMatch,
    fuzzy_filter,
    fuzzy_score,
)
from .loader import (
    FeatureRecord,
    body_id_from_path,
    load_features,
)
from .catalog import (
    BodyCatalog,
    CatalogBuilder,
    LRUCache,
    SearchResponse,
    SearchResult,
    SearchService,
    build_catalog,
)

__all__ = [
    "CoordinateSystem",
    "normalize",
    "FuzzyMatch",
    "fuzzy_filter",
    "fuzzy_score",
    "FeatureRecord",
    "body_id_from_path",
    "load_features",
    "BodyCatalog",
    "CatalogBuilder",
    "LRUCache",
    "SearchResponse",
    "SearchResult",
    "SearchService",
    "build_catalog",
]
