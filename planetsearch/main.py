"""
PLANETSEARCH Application Entry Point

Handles command-line arguments, configuration loading, data source
discovery, catalog construction and serving the HTTP API.

Usage:
    planetsearch                          # Run with default config
    planetsearch --config /path/to/config.yaml
    planetsearch --data-dir ./data --port 8080
    planetsearch --dry-run                # Load the catalog, report, exit

Entry Points:
    - CLI: `planetsearch` command (via pyproject.toml)
    - Direct: `python -m planetsearch.main`
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

from aiohttp import web

from planetsearch import __version__
from planetsearch.config import DataConfig, PlanetSearchConfig, load_config
from planetsearch.exceptions import ConfigurationError, PlanetSearchError
from planetsearch.logging_config import get_logger, setup_logging
from planetsearch.types import DataSource
from services.api.server import create_app
from services.features.catalog import BodyCatalog, SearchService, build_catalog
from services.features.loader import body_id_from_path

__all__ = ["main", "create_parser", "discover_sources", "apply_cli_overrides"]

# Module logger
logger = get_logger(__name__)


# =============================================================================
# Argument Parser
# =============================================================================


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="planetsearch",
        description="PLANETSEARCH planetary surface feature search service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Configuration
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        metavar="PATH",
        help="Path to configuration file (default: auto-discover)",
    )
    parser.add_argument(
        "-d",
        "--data-dir",
        type=str,
        metavar="PATH",
        help="Directory holding one CSV gazetteer per body (overrides config)",
    )

    # Server
    parser.add_argument("--host", type=str, help="Listen address (overrides config)")
    parser.add_argument("--port", type=int, help="Listen port (overrides config)")

    # Logging
    parser.add_argument(
        "-l",
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set logging level (overrides config file)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Path to log file (default: console only)",
    )

    # Operation modes
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Load the catalog, print per-body feature counts and exit",
    )

    return parser


def apply_cli_overrides(config: PlanetSearchConfig, args: argparse.Namespace) -> PlanetSearchConfig:
    """Return a copy of config with command-line values applied."""
    update = {}
    if args.data_dir:
        update["data"] = config.data.model_copy(update={"directory": args.data_dir})
    server_update = {}
    if args.host:
        server_update["host"] = args.host
    if args.port is not None:
        server_update["port"] = args.port
    if server_update:
        update["server"] = config.server.model_copy(update=server_update)
    if args.log_level:
        update["log_level"] = args.log_level
    if args.log_file:
        update["log_file"] = args.log_file
    return config.model_copy(update=update)


# =============================================================================
# Source Discovery
# =============================================================================


def discover_sources(data: DataConfig) -> list[DataSource]:
    """List the gazetteer files to load, one per body, sorted by file name.

    Args:
        data: Data section of the configuration

    Returns:
        DataSource list with per-body header skip counts applied

    Raises:
        ConfigurationError: If the data directory does not exist.
    """
    directory = Path(data.directory)
    if not directory.is_dir():
        raise ConfigurationError(
            f"Data directory not found: {directory}", config_key="data.directory"
        )

    sources = []
    for path in sorted(directory.glob(data.pattern)):
        if not path.is_file():
            continue
        body_id = body_id_from_path(path)
        sources.append(DataSource(body_id, path, data.header_skip_for(body_id)))

    logger.info(f"Discovered {len(sources)} data sources in {directory}")
    return sources


# =============================================================================
# Main Entry Points
# =============================================================================


def print_summary(catalog: BodyCatalog) -> None:
    """Print per-body feature counts."""
    stats = catalog.get_stats()
    print(f"\nPLANETSEARCH v{__version__} catalog")
    print("=" * 40)
    for body, count in sorted(stats["by_body"].items()):
        print(f"  {body:<20} {count:>8} features")
    print("=" * 40)
    print(f"  {stats['bodies']} bodies, {stats['total']} features")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the PLANETSEARCH application.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Basic logging until the config is loaded
    setup_logging(log_level=args.log_level or "INFO")

    try:
        config = apply_cli_overrides(load_config(args.config), args)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    setup_logging(log_level=config.log_level, log_file=config.log_file)
    logger.info(f"PLANETSEARCH v{__version__} starting...")

    try:
        sources = discover_sources(config.data)
        catalog = asyncio.run(build_catalog(sources))

        if args.dry_run:
            print_summary(catalog)
            return 0

        service = SearchService(
            catalog,
            strict_coordinates=config.search.strict_coordinates,
            cache_size=config.search.cache_size,
        )
        app = create_app(service, cors_origin=config.server.cors_origin)

        logger.info(f"Serving on http://{config.server.host}:{config.server.port}")
        web.run_app(app, host=config.server.host, port=config.server.port, print=None)
        return 0
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130  # Standard exit code for SIGINT
    except PlanetSearchError as e:
        logger.error(f"PLANETSEARCH error: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1
    finally:
        logger.info("PLANETSEARCH shutdown complete")


if __name__ == "__main__":
    sys.exit(main())
