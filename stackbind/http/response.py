"""Asynchronous response pipeline.

A request goes through two stages before the caller sees a value:

1. ``ApiResponse`` waits for the response head and checks the status code.
   Anything outside 2xx becomes ``HttpError`` and the body is never read.
2. ``ApiResult`` reads the body of a successful response into one buffer,
   then hands the complete buffer to the target type's body parser.

Both objects are awaitable any number of times, from any number of tasks.
The first await starts a single driving task; later awaits join it and see
the same value or the same exception, so the request is sent once, the body
is read once and the parser runs at most once.
"""

import asyncio
from collections.abc import Awaitable, Callable, Generator
from enum import Enum
from typing import Any, Generic, TypeVar

import httpx

from stackbind.core.log_categories import HTTP
from stackbind.core.logging import get_logger
from stackbind.exceptions import HttpError, ParseError, TransportError

from .body import parse_body_as


__all__ = ["ApiResponse", "ApiResult", "ResultState"]


logger = get_logger(__name__)

T = TypeVar("T")

SendCallable = Callable[[], Awaitable[httpx.Response]]


class ResultState(str, Enum):
    """Progress of an ``ApiResult``. Transitions only move forward."""

    AWAITING_RESPONSE = "awaiting_response"
    AWAITING_BODY = "awaiting_body"
    DONE = "done"


class ApiResponse:
    """Response head of one in-flight request, with its status validated.

    Awaiting it yields the raw ``httpx.Response`` with the body still unread,
    or raises ``HttpError`` / ``TransportError``.
    """

    def __init__(self, send: SendCallable, *, method: str = "GET", url: str = "") -> None:
        """Initialize the response guard.

        Args:
            send: Zero-argument callable starting the request; called once, on
                the first await. It must return a streaming response.
            method: HTTP method, for logging
            url: Request URL, for logging
        """
        self._send: SendCallable | None = send
        self._task: asyncio.Task[httpx.Response] | None = None
        self._body_claimed = False
        self.method = method
        self.url = url

    def __await__(self) -> Generator[Any, None, httpx.Response]:
        if self._task is None:
            self._task = asyncio.ensure_future(self._resolve())
        return self._task.__await__()

    def done(self) -> bool:
        """Whether the response head has arrived (or the request failed)."""
        return self._task is not None and self._task.done()

    def claim_body(self) -> None:
        """Reserve the response body for a single reader.

        Raises:
            RuntimeError: If another reader already claimed the body
        """
        if self._body_claimed:
            raise RuntimeError(
                f"response body of {self.method} {self.url} is already claimed"
            )
        self._body_claimed = True

    async def aclose(self) -> None:
        """Close the response if it arrived successfully."""
        if (
            self._task is not None
            and self._task.done()
            and not self._task.cancelled()
            and self._task.exception() is None
        ):
            await self._task.result().aclose()

    async def _resolve(self) -> httpx.Response:
        send, self._send = self._send, None
        if send is None:
            raise RuntimeError("request was already sent")

        try:
            response = await send()
        except httpx.TransportError as e:
            logger.debug(
                "api_request_failed",
                method=self.method,
                url=self.url,
                error=str(e),
                category=HTTP,
            )
            raise TransportError(
                f"{self.method} {self.url} failed: {e}",
                details={"method": self.method, "url": self.url},
            ) from e

        if response.is_success:
            logger.debug(
                "api_response_received",
                method=self.method,
                url=self.url,
                status_code=response.status_code,
                category=HTTP,
            )
            return response

        # The body stays unread; closing releases the connection.
        await response.aclose()
        logger.info(
            "api_response_rejected",
            method=self.method,
            url=self.url,
            status_code=response.status_code,
            category=HTTP,
        )
        raise HttpError(response.status_code, response)


class ApiResult(Generic[T]):
    """Result of an API call, parsed into ``T``.

    Awaiting it yields a ``T`` or raises one of ``TransportError``,
    ``HttpError`` or ``ParseError``.
    """

    def __init__(self, response: ApiResponse, target: type[T]) -> None:
        response.claim_body()
        self._response = response
        self._state = ResultState.AWAITING_RESPONSE
        self._task: asyncio.Task[T] | None = None
        self.target = target

    def __await__(self) -> Generator[Any, None, T]:
        if self._task is None:
            self._task = asyncio.ensure_future(self._drive())
        return self._task.__await__()

    def __repr__(self) -> str:
        name = getattr(self.target, "__name__", repr(self.target))
        return f"<ApiResult[{name}] {self._state.value}>"

    @property
    def state(self) -> ResultState:
        return self._state

    def done(self) -> bool:
        return self._state is ResultState.DONE

    async def _drive(self) -> T:
        try:
            response = await self._response
            self._state = ResultState.AWAITING_BODY
            body = await self._read_body(response)
            return self._parse(body)
        finally:
            # Cancellation can land after the head arrived but before reading.
            await self._response.aclose()
            self._state = ResultState.DONE

    async def _read_body(self, response: httpx.Response) -> bytes:
        buffer = bytearray()
        try:
            async for chunk in response.aiter_bytes():
                buffer.extend(chunk)
        except httpx.DecodingError as e:
            raise ParseError(
                f"Cannot decode response body: {e}",
                target=getattr(self.target, "__name__", None),
            ) from e
        except httpx.TransportError as e:
            raise TransportError(
                f"Reading response body from {self._response.url} failed: {e}",
                details={"method": self._response.method, "url": self._response.url},
            ) from e
        finally:
            await response.aclose()
        return bytes(buffer)

    def _parse(self, body: bytes) -> T:
        name = getattr(self.target, "__name__", repr(self.target))
        try:
            value = parse_body_as(self.target, body)
        except Exception as e:
            logger.info(
                "api_body_parse_failed",
                target=name,
                body_size=len(body),
                category=HTTP,
            )
            if isinstance(e, ParseError):
                raise
            raise ParseError(
                f"Cannot parse {name} from response body: {e}", target=name
            ) from e
        logger.debug("api_body_parsed", target=name, body_size=len(body), category=HTTP)
        return value
