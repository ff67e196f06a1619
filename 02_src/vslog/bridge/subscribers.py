"""Live subscriber connections."""

import asyncio
import itertools
from typing import Protocol

from fastapi import WebSocket

from ..logging_config import get_logger

logger = get_logger(__name__)

_ids = itertools.count(1)


class SubscriberOverflow(RuntimeError):
    """Raised when a subscriber's receive buffer is full."""


class ISubscriber(Protocol):
    """One live viewer connection."""

    name: str

    async def send(self, payload: str) -> None:
        """Deliver one envelope or raise."""
        ...

    async def close(self) -> None:
        """Tear down the connection after it was dropped."""
        ...


class QueueSubscriber:
    """In-memory subscriber with a bounded receive buffer."""

    def __init__(self, maxsize: int = 100, name: str | None = None):
        self.name = name or f"queue-{next(_ids)}"
        self.queue: asyncio.Queue[str] = asyncio.Queue(maxsize=maxsize)
        self.closed = False

    async def send(self, payload: str) -> None:
        """Buffer the envelope; a full buffer means the reader is stalled."""
        try:
            self.queue.put_nowait(payload)
        except asyncio.QueueFull:
            raise SubscriberOverflow(f"{self.name} buffer full ({self.queue.maxsize})") from None

    async def get(self) -> str:
        """Read the next buffered envelope."""
        return await self.queue.get()

    def drain(self) -> list[str]:
        """Return everything buffered so far."""
        items = []
        while not self.queue.empty():
            items.append(self.queue.get_nowait())
        return items

    async def close(self) -> None:
        """Mark the subscriber as dropped."""
        self.closed = True

    def __repr__(self) -> str:
        return f"QueueSubscriber({self.name!r})"


class WebSocketSubscriber:
    """Subscriber backed by a websocket connection."""

    def __init__(self, websocket: WebSocket):
        self._websocket = websocket
        client = websocket.client
        peer = f"{client.host}:{client.port}" if client else "unknown"
        self.name = f"ws-{next(_ids)}@{peer}"

    async def send(self, payload: str) -> None:
        """Send one text frame."""
        await self._websocket.send_text(payload)

    async def close(self) -> None:
        """Close the socket so the client notices and reconnects."""
        try:
            await self._websocket.close(code=1011)
        except Exception as e:
            logger.debug("Closing %s failed: %s", self.name, e)

    def __repr__(self) -> str:
        return f"WebSocketSubscriber({self.name!r})"
