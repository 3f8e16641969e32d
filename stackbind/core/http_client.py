"""HTTP transport client creation for stackbind.

The transport adapter is a plain ``httpx.AsyncClient``. Timeout policy lives
here, in the transport; the response pipeline in ``stackbind.http`` adds none
of its own.
"""

import os
import ssl
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import httpx

from stackbind.config.http import HTTPSettings
from stackbind.config.settings import Settings

from .log_categories import CONFIG, LIFECYCLE
from .logging import get_logger


logger = get_logger(__name__)


class HTTPClientFactory:
    """Factory for creating configured HTTP clients.

    Clients never follow redirects: a 3xx answer from the API is reported
    to the caller as an error like any other non-success status.
    """

    @staticmethod
    def create_client(
        *,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        **kwargs: Any,
    ) -> httpx.AsyncClient:
        """Create an HTTP client from settings.

        Args:
            settings: Optional settings object; defaults are used when omitted
            transport: Optional transport override (e.g. ``httpx.MockTransport``)
            **kwargs: Additional httpx.AsyncClient arguments

        Returns:
            Configured httpx.AsyncClient instance
        """
        http_settings = settings.http if settings is not None else HTTPSettings()

        timeout = httpx.Timeout(
            connect=http_settings.timeout_connect,
            read=http_settings.timeout_read,
            write=http_settings.timeout_write,
            pool=http_settings.timeout_pool,
        )

        verify: ssl.SSLContext | bool
        if isinstance(http_settings.verify, str):
            verify = ssl.create_default_context(cafile=http_settings.verify)
        elif http_settings.verify:
            verify = _get_ssl_context()
        else:
            verify = False

        if transport is None:
            transport = httpx.AsyncHTTPTransport(verify=verify, proxy=_get_proxy_url())

        default_headers = {"user-agent": http_settings.user_agent}
        if not http_settings.compression_enabled:
            # "identity" means no compression
            default_headers["accept-encoding"] = "identity"
        elif http_settings.accept_encoding:
            default_headers["accept-encoding"] = http_settings.accept_encoding

        if "headers" in kwargs:
            default_headers.update(kwargs.pop("headers"))

        client_config: dict[str, Any] = {
            "timeout": timeout,
            "transport": transport,
            "headers": default_headers,
            "follow_redirects": False,
            **kwargs,
        }

        logger.debug(
            "http_client_created",
            timeout_connect=http_settings.timeout_connect,
            timeout_read=http_settings.timeout_read,
            compression_enabled=http_settings.compression_enabled,
            category=LIFECYCLE,
        )

        return httpx.AsyncClient(**client_config)

    @staticmethod
    @asynccontextmanager
    async def managed_client(
        settings: Settings | None = None, **kwargs: Any
    ) -> AsyncGenerator[httpx.AsyncClient, None]:
        """Create a managed HTTP client with automatic cleanup.

        Example:
            async with HTTPClientFactory.managed_client() as client:
                response = await client.get("https://compute.example.com/v2.1")
        """
        client = HTTPClientFactory.create_client(settings=settings, **kwargs)
        try:
            yield client
        finally:
            await client.aclose()
            logger.debug("managed_http_client_closed", category=LIFECYCLE)


def _get_proxy_url() -> str | None:
    """Get proxy URL from environment variables."""
    proxy_url = (
        os.environ.get("HTTPS_PROXY")
        or os.environ.get("https_proxy")
        or os.environ.get("ALL_PROXY")
        or os.environ.get("HTTP_PROXY")
        or os.environ.get("http_proxy")
    )

    if proxy_url:
        logger.debug("proxy_configured", proxy_url=proxy_url, category=CONFIG)

    return proxy_url


def _get_ssl_context() -> ssl.SSLContext | bool:
    """Resolve TLS verification from REQUESTS_CA_BUNDLE / SSL_CERT_FILE.

    Returns:
        An SSL context for the CA bundle when one is configured and exists,
        else True for default verification
    """
    ca_bundle = os.environ.get("REQUESTS_CA_BUNDLE") or os.environ.get("SSL_CERT_FILE")
    if ca_bundle and Path(ca_bundle).exists():
        logger.debug(
            "ssl_ca_bundle_configured", ca_bundle_path=ca_bundle, category=CONFIG
        )
        return ssl.create_default_context(cafile=ca_bundle)
    return True
