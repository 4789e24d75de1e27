"""
PLANETSEARCH HTTP API

aiohttp application serving feature search results as JSON.
"""

from .server import (
    SEARCH_SERVICE_KEY,
    create_app,
)

__all__ = [
    "SEARCH_SERVICE_KEY",
    "create_app",
]
