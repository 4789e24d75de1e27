"""
PLANETSEARCH Feature Catalog and Search Service

The catalog maps each lowercase body identifier ("mars", "venus", ...) to
the features loaded from that body's gazetteer. It is assembled once at
startup, from sources loaded concurrently, and is read-only afterwards.

The search service answers three kinds of questions against it:
- which bodies have data,
- does a given body have data (an empty query is an existence probe),
- which features on a body fuzzily match a name, with positions converted
  to the canonical east-positive (-180, 180] longitude convention.
"""

import asyncio
import math
import threading
from collections import OrderedDict
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence

from planetsearch.exceptions import BodyNotFoundError, SourceUnreadableError
from planetsearch.logging_config import get_logger
from planetsearch.types import DataSource, Degrees, JsonDict, Kilometers
from services.features.coordinates import CoordinateSystem, normalize
from services.features.fuzzy import fuzzy_filter
from services.features.loader import FeatureRecord, load_features

logger = get_logger(__name__)


def _finite_or_none(value: float) -> Optional[float]:
    """JSON has no NaN/Infinity; unparsable source numbers go out as null."""
    if value is None or not math.isfinite(value):
        return None
    return value


# =============================================================================
# RESULT TYPES
# =============================================================================

@dataclass(frozen=True)
class SearchResult:
    """A feature as returned to callers, in canonical coordinates."""
    name: str
    center_latitude: Degrees
    center_longitude: Degrees
    diameter: Kilometers
    origin: str
    feature_type: Optional[str] = None
    score: float = 0.0

    def to_dict(self) -> JsonDict:
        """Wire representation."""
        data: JsonDict = {
            "name": self.name,
            "centerLatitude": _finite_or_none(self.center_latitude),
            "centerLongitude": _finite_or_none(self.center_longitude),
            "diameter": _finite_or_none(self.diameter),
            "origin": self.origin,
        }
        if self.feature_type is not None:
            data["type"] = self.feature_type
        return data


@dataclass(frozen=True)
class SearchResponse:
    """Outcome of SearchService.search.

    ``results`` is None for existence probes (empty query) and for unknown
    bodies; ``has_data`` tells those two apart.
    """
    body: str
    has_data: bool
    results: Optional[tuple[SearchResult, ...]] = None

    def to_dict(self) -> JsonDict:
        if self.results is None:
            return {"hasData": self.has_data}
        return {
            "name": self.body,
            "result": [result.to_dict() for result in self.results],
        }


# =============================================================================
# LRU CACHE
# =============================================================================

class LRUCache:
    """Small least-recently-used cache with hit/miss statistics."""

    def __init__(self, maxsize: int = 256):
        self.maxsize = maxsize
        self._data: OrderedDict = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, key: Any) -> Optional[Any]:
        with self._lock:
            if key in self._data:
                self._data.move_to_end(key)
                self._hits += 1
                return self._data[key]
            self._misses += 1
            return None

    def put(self, key: Any, value: Any) -> None:
        with self._lock:
            self._data[key] = value
            self._data.move_to_end(key)
            while len(self._data) > self.maxsize:
                self._data.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
            self._hits = 0
            self._misses = 0

    @property
    def stats(self) -> dict:
        with self._lock:
            lookups = self._hits + self._misses
            return {
                "size": len(self._data),
                "maxsize": self.maxsize,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": self._hits / lookups if lookups else 0.0,
            }


# =============================================================================
# CATALOG
# =============================================================================

class BodyCatalog(Mapping[str, tuple[FeatureRecord, ...]]):
    """Read-only mapping of body identifier to its features.

    Keys are lowercase; lookups are case-insensitive. A missing key is the
    only way the catalog says "no data for this body".
    """

    def __init__(self, bodies: Optional[Mapping[str, Sequence[FeatureRecord]]] = None):
        self._bodies = MappingProxyType(
            {body_id.lower(): tuple(records) for body_id, records in (bodies or {}).items()}
        )

    def __getitem__(self, body_id: str) -> tuple[FeatureRecord, ...]:
        if not isinstance(body_id, str):
            raise KeyError(body_id)
        return self._bodies[body_id.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bodies)

    def __len__(self) -> int:
        return len(self._bodies)

    def __repr__(self) -> str:
        counts = ", ".join(f"{body}={len(records)}" for body, records in self._bodies.items())
        return f"BodyCatalog({counts})"

    def body_ids(self) -> set[str]:
        return set(self._bodies)

    @property
    def total_features(self) -> int:
        return sum(len(records) for records in self._bodies.values())

    def get_stats(self) -> dict:
        """Feature counts per body."""
        return {
            "bodies": len(self._bodies),
            "total": self.total_features,
            "by_body": {body: len(records) for body, records in self._bodies.items()},
        }


class CatalogBuilder:
    """Collects per-body feature lists before freezing them into a BodyCatalog.

    Adding a body that is already present replaces it (last added wins).
    """

    def __init__(self):
        self._bodies: dict[str, list[FeatureRecord]] = {}

    def add(self, body_id: str, records: Iterable[FeatureRecord]) -> "CatalogBuilder":
        key = body_id.lower()
        if key in self._bodies:
            logger.warning(f"Body '{key}' loaded more than once, keeping the last source")
        self._bodies[key] = list(records)
        return self

    def build(self) -> BodyCatalog:
        return BodyCatalog(self._bodies)


async def build_catalog(sources: Iterable[DataSource]) -> BodyCatalog:
    """Load every source concurrently and assemble the catalog.

    Each file is read in a worker thread. A source that fails to load is
    logged and left out; the other bodies are unaffected. Results are added
    in source order, so with duplicate body ids the later source wins.

    Args:
        sources: Sources to ingest

    Returns:
        Frozen BodyCatalog
    """
    sources = list(sources)
    results = await asyncio.gather(
        *(asyncio.to_thread(load_features, source.path, source.header_skip) for source in sources),
        return_exceptions=True,
    )

    builder = CatalogBuilder()
    for source, result in zip(sources, results):
        if isinstance(result, SourceUnreadableError):
            logger.error(f"Skipping body '{source.body_id}': {result}")
            continue
        if isinstance(result, Exception):
            logger.error(
                f"Skipping body '{source.body_id}': unexpected error loading {source.path}",
                exc_info=result,
            )
            continue
        if isinstance(result, BaseException):
            raise result
        logger.info(f"Loaded {len(result)} features for '{source.body_id}'")
        builder.add(source.body_id, result)

    catalog = builder.build()
    logger.info(f"Catalog ready: {len(catalog)} bodies, {catalog.total_features} features")
    return catalog


# =============================================================================
# HIGH-LEVEL API
# =============================================================================

class SearchService:
    """Query interface over a built BodyCatalog.

    Search never mutates the catalog; coordinate normalization produces new
    SearchResult objects and leaves the stored records untouched.

    Args:
        catalog: Built catalog
        strict_coordinates: Exclude features whose coordinate system is
            unrecognized instead of returning their longitude unconverted
        cache_size: Number of search responses to memoize (0 disables)
    """

    def __init__(
        self,
        catalog: BodyCatalog,
        strict_coordinates: bool = False,
        cache_size: int = 256,
    ):
        self.catalog = catalog
        self.strict_coordinates = strict_coordinates
        self._cache = LRUCache(maxsize=cache_size) if cache_size > 0 else None

    def list_bodies(self) -> set[str]:
        """All body identifiers with data."""
        return self.catalog.body_ids()

    def has_body(self, body_id: Optional[str]) -> bool:
        return isinstance(body_id, str) and body_id in self.catalog

    def require_body(self, body_id: str) -> tuple[FeatureRecord, ...]:
        """Features for a body.

        Raises:
            BodyNotFoundError: If the body has no data.
        """
        if not self.has_body(body_id):
            raise BodyNotFoundError(f"No feature data for body '{body_id}'", body_id=body_id)
        return self.catalog[body_id]

    def search(self, body_id: str, query: Optional[str] = None) -> SearchResponse:
        """Fuzzy-search feature names on one body.

        Args:
            body_id: Body identifier, any case
            query: Name to match, used as given (surrounding whitespace
                included). Missing, empty or whitespace-only turns the call
                into an existence probe.

        Returns:
            SearchResponse with has_data False for unknown bodies, results
            None for existence probes, otherwise ranked results.

        Examples:
            search("Mars", "")        -> {"hasData": true}
            search("mars", "olympus") -> {"name": "mars", "result": [...]}
        """
        body = body_id.lower() if isinstance(body_id, str) else ""
        if not self.has_body(body):
            return SearchResponse(body=body, has_data=False)

        if query is None or not query.strip():
            return SearchResponse(body=body, has_data=True)

        key = (body, query)
        if self._cache is not None:
            cached = self._cache.get(key)
            if cached is not None:
                return cached

        matches = fuzzy_filter(query, self.catalog[body], extract=lambda record: record.name)
        results = []
        for match in matches:
            result = self._to_result(match.original, match.score)
            if result is not None:
                results.append(result)

        response = SearchResponse(body=body, has_data=True, results=tuple(results))
        if self._cache is not None:
            self._cache.put(key, response)
        logger.debug(f"search {body!r} {query!r}: {len(results)} results")
        return response

    def list_features(self, body_id: str) -> list[SearchResult]:
        """Every feature on a body in source order, in canonical coordinates.

        Raises:
            BodyNotFoundError: If the body has no data.
        """
        results = (self._to_result(record) for record in self.require_body(body_id))
        return [result for result in results if result is not None]

    def _to_result(self, record: FeatureRecord, score: float = 0.0) -> Optional[SearchResult]:
        """Project a stored record to a SearchResult, or None under the strict policy."""
        if self.strict_coordinates and record.coordinate_system is CoordinateSystem.UNSPECIFIED:
            return None
        position = normalize(
            record.center_latitude,
            record.center_longitude,
            record.coordinate_system,
        )
        return SearchResult(
            name=record.name,
            center_latitude=position.latitude,
            center_longitude=position.longitude,
            diameter=record.diameter,
            origin=record.origin,
            feature_type=record.feature_type,
            score=score,
        )

    def cache_stats(self) -> dict:
        if self._cache is None:
            return {"size": 0, "maxsize": 0, "hits": 0, "misses": 0, "hit_rate": 0.0}
        return self._cache.stats

    def clear_cache(self) -> None:
        if self._cache is not None:
            self._cache.clear()
