"""
Pytest fixtures for PLANETSEARCH testing.

Fixtures write small gazetteer CSVs into pytest's tmp_path and build the
catalog and search service over them.
"""

import pytest

from services.features.catalog import CatalogBuilder, SearchService
from services.features.loader import load_features
from tests.fixtures.gazetteer import MARS_ROWS, VENUS_ROWS, write_source


@pytest.fixture
def data_dir(tmp_path):
    """Directory holding mars.csv and venus.csv."""
    directory = tmp_path / "data"
    directory.mkdir()
    write_source(directory, "mars.csv", MARS_ROWS)
    write_source(directory, "venus.csv", VENUS_ROWS)
    return directory


@pytest.fixture
def catalog(data_dir):
    """Catalog built from the data_dir sources."""
    builder = CatalogBuilder()
    for path in sorted(data_dir.glob("*.csv")):
        builder.add(path.stem, load_features(path))
    return builder.build()


@pytest.fixture
def service(catalog):
    """Permissive search service over the sample catalog."""
    return SearchService(catalog)
