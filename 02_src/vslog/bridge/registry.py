"""Registry of currently connected live subscribers."""

import asyncio
from typing import Protocol

from ..logging_config import get_logger
from .subscribers import ISubscriber

logger = get_logger(__name__)


class ISubscriberRegistry(Protocol):
    """Concurrently mutated set of live subscriber connections."""

    async def register(self, subscriber: ISubscriber) -> None:
        """Add a subscriber. Registering twice is a no-op."""
        ...

    async def unregister(self, subscriber: ISubscriber) -> None:
        """Remove a subscriber if present."""
        ...

    async def snapshot(self) -> tuple[ISubscriber, ...]:
        """Consistent copy of the current members."""
        ...


class SubscriberRegistry:
    """Set of subscribers guarded by an asyncio lock."""

    def __init__(self):
        self._subscribers: set[ISubscriber] = set()
        self._lock = asyncio.Lock()

    async def register(self, subscriber: ISubscriber) -> None:
        """Add a subscriber. Registering twice is a no-op."""
        async with self._lock:
            if subscriber in self._subscribers:
                logger.debug("Subscriber %s already registered", subscriber.name)
                return
            self._subscribers.add(subscriber)
            count = len(self._subscribers)
        logger.info("Subscriber %s connected (%d live)", subscriber.name, count)

    async def unregister(self, subscriber: ISubscriber) -> None:
        """Remove a subscriber if present."""
        async with self._lock:
            if subscriber not in self._subscribers:
                return
            self._subscribers.discard(subscriber)
            count = len(self._subscribers)
        logger.info("Subscriber %s removed (%d live)", subscriber.name, count)

    async def snapshot(self) -> tuple[ISubscriber, ...]:
        """Consistent copy of the current members."""
        async with self._lock:
            return tuple(self._subscribers)

    def __contains__(self, subscriber: object) -> bool:
        return subscriber in self._subscribers

    def __len__(self) -> int:
        return len(self._subscribers)
