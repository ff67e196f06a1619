"""In-process publish channel for a recorder and bridge sharing a process."""

import asyncio

from ..logging_config import get_logger

logger = get_logger(__name__)


class InProcessSource:
    """Bounded queue the bridge reads envelopes from."""

    def __init__(self, maxsize: int = 1024):
        self._maxsize = maxsize
        self._queue: asyncio.Queue[bytes] | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self.dropped = 0

    async def open(self) -> None:
        """Bind the source to the running event loop."""
        if self._queue is not None:
            return
        self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue(maxsize=self._maxsize)

    async def receive(self) -> bytes:
        """Wait for the next envelope."""
        if self._queue is None:
            raise RuntimeError("Source not opened")
        return await self._queue.get()

    async def close(self) -> None:
        """Detach from the loop; later offers are dropped."""
        self._loop = None
        self._queue = None

    def offer_threadsafe(self, payload: bytes) -> bool:
        """Schedule an envelope onto the bound loop from any thread."""
        loop = self._loop
        if loop is None or loop.is_closed():
            self.dropped += 1
            return False

        try:
            loop.call_soon_threadsafe(self._offer, payload)
        except RuntimeError:
            # loop closed between the check and the call
            self.dropped += 1
            return False
        return True

    def _offer(self, payload: bytes) -> None:
        if self._queue is None:
            self.dropped += 1
            return
        try:
            self._queue.put_nowait(payload)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning("Live queue full (%s), dropping envelope", self._maxsize)


class InProcessChannel:
    """Publish channel feeding an InProcessSource; safe to call from any thread."""

    def __init__(self, source: InProcessSource):
        self._source = source

    @property
    def source(self) -> InProcessSource:
        """Receiving end of this channel."""
        return self._source

    def publish(self, payload: bytes) -> bool:
        """Hand the envelope to the bridge loop, dropping if nobody listens."""
        if not self._source.offer_threadsafe(payload):
            logger.debug("No live listener, dropping envelope")
            return False
        return True

    def close(self) -> None:
        """Nothing to release on the sending side."""
        return
