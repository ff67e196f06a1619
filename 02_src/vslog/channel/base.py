"""Publish channel and event source interfaces."""

from typing import Protocol


class IPublishChannel(Protocol):
    """Lossy, one-way transport from a recorder to a fan-out bridge."""

    def publish(self, payload: bytes) -> bool:
        """Fire-and-forget send. Never blocks, never raises; False if dropped."""
        ...

    def close(self) -> None:
        """Release the sending endpoint."""
        ...


class IEventSource(Protocol):
    """Receiving end of a publish channel, read by the bridge."""

    async def open(self) -> None:
        """Bind the receiving endpoint."""
        ...

    async def receive(self) -> bytes:
        """Wait for the next serialized envelope."""
        ...

    async def close(self) -> None:
        """Release the receiving endpoint."""
        ...
