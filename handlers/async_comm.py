"""Asynchronous HTTP transport for the translation providers.

The `AsyncHttp` class sends the HttpRequest objects built by providers and returns the status
code and raw body as an HttpResponse. Non-2xx responses are returned rather than raised so that
the caller can classify them; only transport-level problems raise.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, Self

import aiohttp
from aiohttp.client import ClientSession

from models.http_models import HttpResponse
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from models.http_models import HttpRequest


__all__: list[str] = ["AsyncCommError", "AsyncCommTimeoutError", "AsyncHttp"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

CONNECT_TIMEOUT: Final[float] = 1.0


class AsyncHttp:
    """Asynchronous HTTP client implementing the provider transport.

    The aiohttp session is created on first use inside the running event loop and reused for
    every request until close() is called. A closed client reopens its session on the next use.
    """

    def __init__(self, *, proxies: dict[str, str] | None = None) -> None:
        """Initialize the AsyncHttp client.

        Args:
            proxies (dict[str, str] | None): Optional proxies keyed by scheme ("https", "http").
        """
        logger.info("%s initializing", self.__class__.__name__)
        self.__session: ClientSession | None = None
        self.proxies: dict[str, str] = proxies if isinstance(proxies, dict) else {}

    async def __aenter__(self) -> Self:
        logger.debug("%s entering context", self.__class__.__name__)
        self.initialize_session(suppress_already_log=True)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        _ = exc_type, exc_val, exc_tb
        logger.debug("%s exiting context", self.__class__.__name__)
        await self.close()

    def initialize_session(self, *, suppress_already_log: bool = False) -> None:
        """Initialize the aiohttp session. Must be called with a running event loop.

        Args:
            suppress_already_log (bool): If True, do not log when the session is already initialized.
        """
        if self.__session is None or self.__session.closed:
            self.__session = ClientSession()
            logger.debug("%s session initialized", self.__class__.__name__)
        elif not suppress_already_log:
            logger.debug("%s session already initialized", self.__class__.__name__)

    @property
    def session(self) -> ClientSession:
        """Get the current aiohttp session, creating it if needed."""
        self.initialize_session(suppress_already_log=True)
        if self.__session is None:
            msg = "Session is not initialized"
            raise RuntimeError(msg)
        return self.__session

    @property
    def is_open(self) -> bool:
        return self.__session is not None and not self.__session.closed

    async def close(self) -> None:
        """Close the aiohttp session if it is open."""
        if self.__session and not self.__session.closed:
            await self.__session.close()
        logger.info("%s session closed", self.__class__.__name__)

    @staticmethod
    def _client_timeout(total_timeout: float) -> aiohttp.ClientTimeout:
        if total_timeout <= 0:
            # If total_timeout is 0 or negative, set no timeout
            return aiohttp.ClientTimeout(total=None)
        if total_timeout < CONNECT_TIMEOUT:
            # A connect timeout longer than the total would never apply
            return aiohttp.ClientTimeout(total=total_timeout)
        return aiohttp.ClientTimeout(connect=CONNECT_TIMEOUT, total=total_timeout)

    async def send(self, request: HttpRequest, *, timeout: float = 10.0) -> HttpResponse:  # noqa: ASYNC109
        """Send one request and return its status and body.

        Args:
            request (HttpRequest): The request built by a provider.
            timeout (float): Total timeout for the request in seconds. 0 or less disables it.

        Returns:
            HttpResponse: Status code, body text and media type. Error statuses are returned as is.

        Raises:
            AsyncCommTimeoutError: If the server does not answer in time.
            AsyncCommError: If the connection fails or the body cannot be read.
        """
        logger.debug("[%s] %r timeout=%s", request.method, request, timeout)
        proxy: str | None = self.proxies.get("https") or self.proxies.get("http")
        data: bytes | None = request.body.encode("utf-8") if request.body is not None else None

        try:
            async with self.session.request(
                method=request.method,
                url=request.url,
                headers=request.headers,
                data=data,
                timeout=self._client_timeout(timeout),
                proxy=proxy,
            ) as resp:
                body: str = await resp.text(errors="replace")
                content_type: str = resp.headers.get("Content-Type", "").split(";")[0].strip()
                logger.debug("Response status=%s 'Content-Type': '%s'", resp.status, content_type)
                return HttpResponse(status=resp.status, body=body, content_type=content_type)

        except TimeoutError as err:
            logger.debug(err)
            msg = "Timeout due to a lack of response from the server."
            raise AsyncCommTimeoutError(msg) from err
        except ConnectionResetError as err:
            logger.debug(err)
            msg = "The connection to the server has been disconnected."
            raise AsyncCommError(msg) from err
        except aiohttp.ClientConnectorError as err:
            logger.debug(err)
            msg = "The server is not running, or the port is closed."
            raise AsyncCommError(msg) from err
        except aiohttp.ClientError as err:
            logger.debug(err)
            msg = f"HTTP communication failed: {err.__class__.__name__}"
            raise AsyncCommError(msg) from err


class AsyncCommError(Exception):
    """Base class for asynchronous communication errors.

    Raised for transport problems such as refused connections or interrupted transfers.
    """

    def __init__(self, msg: str | BaseException) -> None:
        self.msg: str = str(msg)
        super().__init__(self.msg)


class AsyncCommTimeoutError(AsyncCommError):
    """Error raised when an asynchronous communication operation times out."""
