import asyncio
from dataclasses import dataclass
from typing import AsyncIterator, Optional, Protocol, Union

ClientId = str

PROGRESS_MIN = 0
PROGRESS_MAX = 100


@dataclass(frozen=True)
class Progress:
    value: int

    def __post_init__(self) -> None:
        if not PROGRESS_MIN <= self.value <= PROGRESS_MAX:
            raise ValueError(f"progress must be within [0, 100], got {self.value}")


@dataclass(frozen=True)
class Completed:
    pass


ProgressEvent = Union[Progress, Completed]


class ProgressListener(Protocol):
    def on_progress(self, value: int) -> None: ...

    def on_completion(self) -> None: ...


class ChannelClosed(Exception):
    """Raised when writing to a channel whose connection has gone away."""


class Channel(Protocol):
    def send(self, message: str) -> None: ...


_CLOSE = object()


class SseChannel:
    """
    One open ``/progress-events`` connection.

    ``send`` may be called from any thread (jobs run on the request's worker
    thread); messages are handed to the event loop that owns the HTTP stream
    and come out of ``stream()`` in order. A client disconnect ends the stream
    and marks the channel closed, so the next ``send`` raises ``ChannelClosed``.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop or asyncio.get_running_loop()
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed or self._loop.is_closed()

    def send(self, message: str) -> None:
        if self.closed:
            raise ChannelClosed("channel is closed")
        try:
            self._loop.call_soon_threadsafe(self._queue.put_nowait, message)
        except RuntimeError as exc:
            # loop shut down between the check and the call
            self._closed = True
            raise ChannelClosed("event loop is closed") from exc

    def close(self) -> None:
        was_open = not self.closed
        self._closed = True
        if was_open:
            self._loop.call_soon_threadsafe(self._queue.put_nowait, _CLOSE)

    async def stream(self) -> AsyncIterator[str]:
        try:
            while True:
                message = await self._queue.get()
                if message is _CLOSE:
                    break
                yield message
        finally:
            self._closed = True
