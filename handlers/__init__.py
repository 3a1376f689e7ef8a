"""HTTP handling for Nexo Translate.

This package provides the outbound HTTP transport used by the translation providers and the
inbound aiohttp application serving the JSON API.
"""

from handlers.api_routes import create_app
from handlers.async_comm import AsyncCommError, AsyncCommTimeoutError, AsyncHttp

__all__: list[str] = [
    "AsyncCommError",
    "AsyncCommTimeoutError",
    "AsyncHttp",
    "create_app",
]
