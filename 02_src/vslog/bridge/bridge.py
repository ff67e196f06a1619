"""Fan-out bridge: replicates published envelopes to live subscribers."""

import asyncio
from enum import Enum
from typing import Protocol

from ..channel import IEventSource
from ..config import DEFAULT_SEND_TIMEOUT
from ..logging_config import get_logger
from .registry import ISubscriberRegistry, SubscriberRegistry
from .subscribers import ISubscriber

logger = get_logger(__name__)


class BridgeState(str, Enum):
    """Lifecycle states of the bridge loop."""

    STOPPED = "stopped"
    LISTENING = "listening"
    BROADCASTING = "broadcasting"


class IFanoutBridge(Protocol):
    """Long-running receive-and-broadcast loop."""

    async def start(self) -> None:
        """Open the source and start the loop."""
        ...

    async def stop(self) -> None:
        """Signal shutdown and wait for the loop to exit."""
        ...

    async def broadcast(self, payload: str) -> int:
        """Send one envelope to every registered subscriber."""
        ...


class FanoutBridge:
    """Receives envelopes from an event source and broadcasts them."""

    def __init__(
        self,
        source: IEventSource,
        registry: ISubscriberRegistry | None = None,
        send_timeout: float = DEFAULT_SEND_TIMEOUT,
        receive_backoff: float = 0.1,
    ):
        self._source = source
        self._registry = registry if registry is not None else SubscriberRegistry()
        self._send_timeout = send_timeout
        self._receive_backoff = receive_backoff
        self._shutdown = asyncio.Event()
        self._task: asyncio.Task | None = None
        self._state = BridgeState.STOPPED

    @property
    def state(self) -> BridgeState:
        """Current lifecycle state."""
        return self._state

    @property
    def registry(self) -> ISubscriberRegistry:
        """Subscriber registry owned by this bridge."""
        return self._registry

    async def start(self) -> None:
        """Open the source and start the loop."""
        if self._task is not None:
            return

        await self._source.open()
        self._shutdown.clear()
        self._state = BridgeState.LISTENING
        self._task = asyncio.create_task(self._run(), name="vslog-fanout-bridge")
        logger.info("Fan-out bridge started")

    async def stop(self) -> None:
        """Signal shutdown and wait for the current iteration to finish."""
        if self._task is None:
            return

        self._shutdown.set()
        try:
            await self._task
        finally:
            self._task = None
            await self._source.close()
            self._state = BridgeState.STOPPED
            logger.info("Fan-out bridge stopped")

    async def _run(self) -> None:
        while not self._shutdown.is_set():
            try:
                payload = await self._next_payload()
            except Exception as e:
                logger.warning("Live receive failed, retrying: %s", e)
                await self._backoff()
                continue

            if payload is None:
                continue
            if not payload:
                await self._backoff()
                continue

            try:
                text = payload.decode("utf-8")
            except UnicodeDecodeError:
                logger.warning("Dropping non UTF-8 envelope (%d bytes)", len(payload))
                continue

            self._state = BridgeState.BROADCASTING
            try:
                await self.broadcast(text)
            except Exception:
                logger.exception("Broadcast failed")
            finally:
                self._state = BridgeState.LISTENING

    async def _next_payload(self) -> bytes | None:
        """Wait for a datagram or shutdown, whichever comes first."""
        receive = asyncio.ensure_future(self._source.receive())
        shutdown = asyncio.ensure_future(self._shutdown.wait())
        try:
            done, _ = await asyncio.wait(
                {receive, shutdown}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            for fut in (receive, shutdown):
                if not fut.done():
                    fut.cancel()

        if receive in done:
            return receive.result()
        return None

    async def _backoff(self) -> None:
        try:
            await asyncio.wait_for(self._shutdown.wait(), timeout=self._receive_backoff)
        except asyncio.TimeoutError:
            pass

    async def broadcast(self, payload: str) -> int:
        """Send one envelope to a snapshot of subscribers, dropping failures."""
        subscribers = await self._registry.snapshot()
        if not subscribers:
            return 0

        results = await asyncio.gather(
            *(self._send_one(subscriber, payload) for subscriber in subscribers)
        )
        return sum(results)

    async def _send_one(self, subscriber: ISubscriber, payload: str) -> bool:
        try:
            await asyncio.wait_for(subscriber.send(payload), timeout=self._send_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Send to %s timed out after %.2fs, dropping subscriber",
                subscriber.name,
                self._send_timeout,
                extra={"context": {"subscriber": subscriber.name}},
            )
        except Exception as e:
            logger.warning(
                "Send to %s failed, dropping subscriber: %s",
                subscriber.name,
                e,
                extra={"context": {"subscriber": subscriber.name}},
            )
        else:
            return True

        await self._registry.unregister(subscriber)
        try:
            await asyncio.wait_for(subscriber.close(), timeout=self._send_timeout)
        except Exception as e:
            logger.debug("Closing %s failed: %s", subscriber.name, e)
        return False
