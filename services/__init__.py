"""
PLANETSEARCH Services Package

Service modules organized by function.

Feature Search (services.features)
----------------------------------
- load_features: CSV gazetteer ingestion into FeatureRecord lists
- normalize / CoordinateSystem: canonical longitude conversion
- fuzzy_filter: subsequence matching and ranking of feature names
- BodyCatalog / build_catalog: immutable per-body feature catalog
- SearchService: existence probes and fuzzy search

HTTP API (services.api)
-----------------------
- create_app: aiohttp application exposing SearchService as JSON
"""

__version__ = "0.1.0"
