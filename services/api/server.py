"""
PLANETSEARCH HTTP API

Thin aiohttp layer over SearchService. Routes:

    GET /health                     Liveness and number of loaded bodies
    GET /1/search                   {"planets": [...]}
    GET /1/search/{planet}?query=Q  Existence probe or fuzzy search
    GET /1/list/{planet}            Every feature on a body

Body names in the path are case-insensitive. Unknown bodies get a 404 with
{"hasData": false}. Every response carries an Access-Control-Allow-Origin
header, and unexpected errors become an opaque 500 without stopping the
server.
"""

from typing import Awaitable, Callable

from aiohttp import web

from planetsearch.constants import API_PREFIX, DEFAULT_CORS_ORIGIN
from planetsearch.exceptions import BodyNotFoundError
from planetsearch.logging_config import get_logger
from services.features.catalog import SearchService

logger = get_logger(__name__)

SEARCH_SERVICE_KEY = web.AppKey("search_service", SearchService)
CORS_ORIGIN_KEY = web.AppKey("cors_origin", str)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]

NOT_FOUND_BODY = {"hasData": False}
SERVER_ERROR_BODY = {"error": "internal server error"}


# =============================================================================
# Middleware
# =============================================================================

@web.middleware
async def cors_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Allow browser front ends on other origins to call the API."""
    origin = request.app[CORS_ORIGIN_KEY]
    try:
        response = await handler(request)
    except web.HTTPException as e:
        e.headers["Access-Control-Allow-Origin"] = origin
        raise
    response.headers["Access-Control-Allow-Origin"] = origin
    return response


@web.middleware
async def error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Turn unexpected exceptions into an opaque 500 response."""
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except Exception:
        logger.exception(f"Unhandled error serving {request.method} {request.path_qs}")
        return web.json_response(SERVER_ERROR_BODY, status=500)


# =============================================================================
# Handlers
# =============================================================================

async def handle_health(request: web.Request) -> web.Response:
    """Handle health check requests."""
    service = request.app[SEARCH_SERVICE_KEY]
    return web.json_response({"status": "ok", "bodies": len(service.list_bodies())})


async def handle_list_bodies(request: web.Request) -> web.Response:
    """Handle GET /1/search."""
    service = request.app[SEARCH_SERVICE_KEY]
    return web.json_response({"planets": sorted(service.list_bodies())})


async def handle_search(request: web.Request) -> web.Response:
    """Handle GET /1/search/{planet}?query=..."""
    service = request.app[SEARCH_SERVICE_KEY]
    planet = request.match_info["planet"]
    query = request.query.get("query")

    response = service.search(planet, query)
    if not response.has_data:
        return web.json_response(NOT_FOUND_BODY, status=404)
    return web.json_response(response.to_dict())


async def handle_list_features(request: web.Request) -> web.Response:
    """Handle GET /1/list/{planet}."""
    service = request.app[SEARCH_SERVICE_KEY]
    planet = request.match_info["planet"].lower()

    try:
        results = service.list_features(planet)
    except BodyNotFoundError:
        return web.json_response(NOT_FOUND_BODY, status=404)

    return web.json_response({
        "name": planet,
        "result": [result.to_dict() for result in results],
    })


# =============================================================================
# Application
# =============================================================================

def create_app(
    service: SearchService,
    cors_origin: str = DEFAULT_CORS_ORIGIN,
) -> web.Application:
    """Create and configure the web application.

    Args:
        service: Search service over an already-built catalog
        cors_origin: Value for the Access-Control-Allow-Origin header
    """
    app = web.Application(middlewares=[cors_middleware, error_middleware])
    app[SEARCH_SERVICE_KEY] = service
    app[CORS_ORIGIN_KEY] = cors_origin

    app.router.add_get("/health", handle_health)
    app.router.add_get(f"{API_PREFIX}/search", handle_list_bodies)
    app.router.add_get(f"{API_PREFIX}/search/{{planet}}", handle_search)
    app.router.add_get(f"{API_PREFIX}/list/{{planet}}", handle_list_features)

    return app
