"""Client binding the response pipeline to an httpx transport."""

from functools import partial
from types import TracebackType
from typing import Any, TypeVar

import httpx

from stackbind.config.settings import Settings, get_settings
from stackbind.core.http_client import HTTPClientFactory
from stackbind.core.log_categories import LIFECYCLE
from stackbind.core.logging import get_logger

from .response import ApiResponse, ApiResult


__all__ = ["Client"]


logger = get_logger(__name__)

T = TypeVar("T")


class Client:
    """Type of HTTP(s) client used for API calls.

    One request produces one ``ApiResponse``/``ApiResult``; the client does
    not coordinate between them. It sends nothing until a result is awaited.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Transport client to use. When omitted, one is built
                from ``settings`` and closed by ``aclose``.
            settings: Settings to use; defaults to ``get_settings()``
        """
        self.settings = settings or get_settings()
        self._owns_http_client = http_client is None
        self.http_client = http_client or HTTPClientFactory.create_client(
            settings=self.settings
        )

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the transport client if this client created it."""
        if self._owns_http_client:
            await self.http_client.aclose()
            logger.debug("client_closed", category=LIFECYCLE)

    def build_request(
        self,
        method: str,
        url: str,
        *,
        params: Any = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Request:
        """Build a request carrying the JSON accept header and auth token."""
        request_headers = {"accept": "application/json"}
        token = self.settings.compute.auth_token
        if token is not None:
            request_headers["x-auth-token"] = token.get_secret_value()
        if headers:
            request_headers.update(headers)
        return self.http_client.build_request(
            method, url, params=params, json=json, headers=request_headers
        )

    def request(self, request: httpx.Request) -> ApiResponse:
        """Send a request, returning its status-checked response head."""
        return ApiResponse(
            partial(self.http_client.send, request, stream=True),
            method=request.method,
            url=str(request.url),
        )

    def fetch(self, request: httpx.Request, target: type[T]) -> ApiResult[T]:
        """Send a request and parse the response body into ``target``."""
        return ApiResult(self.request(request), target)
