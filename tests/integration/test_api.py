"""
Integration tests for the PLANETSEARCH HTTP API.

Runs the aiohttp application in-process against a catalog loaded from
sample gazetteer files and checks routes, status codes, JSON bodies and
headers.
"""

from unittest.mock import Mock

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestClient, TestServer

from planetsearch.types import DataSource
from services.api.server import create_app
from services.features.catalog import SearchService, build_catalog

pytestmark = pytest.mark.integration


@pytest_asyncio.fixture
async def client(service):
    """Test client for an app over the sample catalog."""
    async with TestClient(TestServer(create_app(service))) as test_client:
        yield test_client


class TestBodiesRoute:
    """GET /1/search"""

    @pytest.mark.asyncio
    async def test_lists_planets(self, client):
        resp = await client.get("/1/search")
        assert resp.status == 200
        assert await resp.json() == {"planets": ["mars", "venus"]}

    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status == 200
        assert await resp.json() == {"status": "ok", "bodies": 2}


class TestSearchRoute:
    """GET /1/search/{planet}"""

    @pytest.mark.asyncio
    async def test_existence_probe(self, client):
        resp = await client.get("/1/search/Mars")
        assert resp.status == 200
        assert await resp.json() == {"hasData": True}

    @pytest.mark.asyncio
    async def test_empty_query_is_probe(self, client):
        resp = await client.get("/1/search/venus", params={"query": ""})
        assert await resp.json() == {"hasData": True}

    @pytest.mark.asyncio
    async def test_unknown_body(self, client):
        resp = await client.get("/1/search/pluto", params={"query": "sputnik"})
        assert resp.status == 404
        assert await resp.json() == {"hasData": False}

    @pytest.mark.asyncio
    async def test_fuzzy_search(self, client):
        resp = await client.get("/1/search/MARS", params={"query": "gale"})
        assert resp.status == 200

        data = await resp.json()
        assert data["name"] == "mars"
        names = [feature["name"] for feature in data["result"]]
        assert names[0] == "Gale"
        assert "Galle" in names

    @pytest.mark.asyncio
    async def test_canonical_longitude(self, client):
        """Test a west-positive source row comes back east-positive."""
        resp = await client.get("/1/search/venus", params={"query": "mead"})
        (mead,) = (await resp.json())["result"]

        assert mead["centerLongitude"] == pytest.approx(-30.0)
        assert mead["centerLatitude"] == pytest.approx(12.5)
        assert mead["diameter"] == pytest.approx(270.0)
        assert mead["origin"] == "Margaret Mead; American anthropologist."
        assert mead["type"] == "Crater"

    @pytest.mark.asyncio
    async def test_no_matches(self, client):
        resp = await client.get("/1/search/mars", params={"query": "zzz"})
        assert resp.status == 200
        assert await resp.json() == {"name": "mars", "result": []}


class TestListRoute:
    """GET /1/list/{planet}"""

    @pytest.mark.asyncio
    async def test_lists_features_in_source_order(self, client):
        resp = await client.get("/1/list/Venus")
        assert resp.status == 200

        data = await resp.json()
        assert data["name"] == "venus"
        assert [f["name"] for f in data["result"]] == ["Mead", "Maxwell Montes"]
        assert data["result"][0]["centerLongitude"] == pytest.approx(-30.0)

    @pytest.mark.asyncio
    async def test_unknown_body(self, client):
        resp = await client.get("/1/list/pluto")
        assert resp.status == 404
        assert await resp.json() == {"hasData": False}


class TestCors:
    """Access-Control-Allow-Origin on every response."""

    @pytest.mark.asyncio
    async def test_header_on_success(self, client):
        resp = await client.get("/1/search")
        assert resp.headers["Access-Control-Allow-Origin"] == "*"

    @pytest.mark.asyncio
    async def test_header_on_not_found_body(self, client):
        resp = await client.get("/1/search/pluto")
        assert resp.headers["Access-Control-Allow-Origin"] == "*"

    @pytest.mark.asyncio
    async def test_header_on_unknown_route(self, client):
        resp = await client.get("/2/nothing")
        assert resp.status == 404
        assert resp.headers["Access-Control-Allow-Origin"] == "*"

    @pytest.mark.asyncio
    async def test_configured_origin(self, service):
        app = create_app(service, cors_origin="https://maps.example.org")
        async with TestClient(TestServer(app)) as test_client:
            resp = await test_client.get("/1/search")
            assert resp.headers["Access-Control-Allow-Origin"] == "https://maps.example.org"


class TestErrorHandling:
    """Unexpected failures become an opaque 500."""

    @pytest.mark.asyncio
    async def test_internal_error(self):
        service = Mock(spec=SearchService)
        service.search.side_effect = RuntimeError("disk on fire")

        async with TestClient(TestServer(create_app(service))) as test_client:
            resp = await test_client.get("/1/search/mars", params={"query": "gale"})
            assert resp.status == 500
            assert await resp.json() == {"error": "internal server error"}
            assert resp.headers["Access-Control-Allow-Origin"] == "*"

            # Server keeps serving after the failure
            service.list_bodies.return_value = {"mars"}
            resp = await test_client.get("/1/search")
            assert resp.status == 200


class TestEmptyBody:
    """A body whose source has no rows is still served."""

    @pytest.mark.asyncio
    async def test_probe_and_list(self, tmp_path):
        path = tmp_path / "ceres.csv"
        path.write_text("", encoding="utf-8")
        catalog = await build_catalog([DataSource("ceres", path)])

        async with TestClient(TestServer(create_app(SearchService(catalog)))) as test_client:
            resp = await test_client.get("/1/search/ceres")
            assert resp.status == 200
            assert await resp.json() == {"hasData": True}

            resp = await test_client.get("/1/list/ceres")
            assert await resp.json() == {"name": "ceres", "result": []}
