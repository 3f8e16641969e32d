"""Instrumented httpx transports for observing the response pipeline."""

import asyncio
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, field

import httpx


class TrackingStream(httpx.AsyncByteStream):
    """Response body that records how it is consumed.

    When ``gate`` is given, iteration pauses after the first chunk until the
    event is set.
    """

    def __init__(
        self,
        chunks: list[bytes],
        *,
        gate: asyncio.Event | None = None,
        fail_after: int | None = None,
    ) -> None:
        self.chunks = chunks
        self.gate = gate
        self.fail_after = fail_after
        self.iterations = 0
        self.chunks_read = 0
        self.closed = False

    async def __aiter__(self) -> AsyncIterator[bytes]:
        self.iterations += 1
        for index, chunk in enumerate(self.chunks):
            if self.fail_after is not None and index >= self.fail_after:
                raise httpx.ReadError("connection reset by peer")
            self.chunks_read += 1
            yield chunk
            if self.gate is not None and index == 0:
                await self.gate.wait()
            await asyncio.sleep(0)

    async def aclose(self) -> None:
        self.closed = True


@dataclass
class RecordingBackend:
    """Serves one canned response and counts the requests it receives."""

    status_code: int = 200
    chunks: list[bytes] = field(default_factory=list)
    headers: dict[str, str] = field(default_factory=dict)
    gate: asyncio.Event | None = None
    fail_after: int | None = None
    error: Callable[[httpx.Request], Exception] | None = None
    requests: list[httpx.Request] = field(default_factory=list)
    streams: list[TrackingStream] = field(default_factory=list)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error(request)
        stream = TrackingStream(
            list(self.chunks), gate=self.gate, fail_after=self.fail_after
        )
        self.streams.append(stream)
        return httpx.Response(
            self.status_code, headers=self.headers, stream=stream, request=request
        )

    @property
    def stream(self) -> TrackingStream:
        assert len(self.streams) == 1
        return self.streams[0]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


def split_chunks(body: bytes, size: int = 7) -> list[bytes]:
    return [body[i : i + size] for i in range(0, len(body), size)]
