"""Application bootstrap and lifecycle management."""

from typing import Protocol

from .bridge import FanoutBridge, ISubscriberRegistry
from .channel import (
    IEventSource,
    IPublishChannel,
    InProcessChannel,
    InProcessSource,
    UnixDatagramChannel,
    UnixDatagramSource,
)
from .config import Settings, load_settings
from .logging_config import get_logger
from .models import Kind, Severity
from .recorder import Recorder

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Start the live bridge."""
        ...

    async def stop(self) -> None:
        """Stop the bridge and close the recorder."""
        ...


class Application:
    """Wires a recorder to a fan-out bridge.

    With a configured socket path the recorder publishes over a Unix datagram
    socket the bridge listens on, so other processes may publish too.
    Otherwise both share an in-process channel.
    """

    def __init__(self, settings: Settings | None = None):
        self._settings = settings if settings is not None else load_settings()

        source: IEventSource
        channel: IPublishChannel | None = None
        if self._settings.uds_path is not None:
            try:
                source = UnixDatagramSource(self._settings.uds_path)
                channel = UnixDatagramChannel(self._settings.uds_path)
            except (OSError, ValueError) as e:
                logger.error("Live publishing disabled: %s", e)
                source = InProcessSource()
        else:
            in_process = InProcessSource()
            source = in_process
            channel = InProcessChannel(in_process)

        self._recorder = Recorder(
            log_file=self._settings.log_file,
            fsync=self._settings.fsync,
            channel=channel,
        )
        self._bridge = FanoutBridge(source, send_timeout=self._settings.send_timeout)

    async def start(self) -> None:
        """Start the live bridge."""
        logger.info(
            "Starting vslog (durable=%s, live=%s)",
            self._settings.log_file,
            self._settings.uds_path or "in-process",
        )
        try:
            await self._bridge.start()
        except OSError as e:
            logger.error(
                "Cannot listen for live events, live fan-out disabled: %s",
                e,
                extra={"context": {"socket": str(self._settings.uds_path)}},
            )
            self._recorder.disable_live()

    async def stop(self) -> None:
        """Stop the bridge, then close the recorder."""
        await self._bridge.stop()
        self._recorder.close()
        logger.info("vslog stopped")

    def record(
        self,
        kind: Kind | str,
        severity: Severity | str,
        message: str,
        activity_id: int = 0,
        parent_id: int = 0,
    ) -> None:
        """Record one event through the application's recorder."""
        self._recorder.record(kind, severity, message, activity_id, parent_id)

    @property
    def settings(self) -> Settings:
        """Active settings."""
        return self._settings

    @property
    def recorder(self) -> Recorder:
        """Producer-facing recorder."""
        return self._recorder

    @property
    def bridge(self) -> FanoutBridge:
        """Fan-out bridge."""
        return self._bridge

    @property
    def registry(self) -> ISubscriberRegistry:
        """Live subscriber registry."""
        return self._bridge.registry
