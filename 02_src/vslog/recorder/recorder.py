"""Event recorder: identity assignment and the synchronous write path."""

import threading
import time
from pathlib import Path
from typing import Protocol

from ..channel import IPublishChannel, UnixDatagramChannel, encode_envelope
from ..logging_config import get_logger
from ..models import MAX_ID, Event, Kind, Severity
from ..storage import FileSink, IDurableSink

logger = get_logger(__name__)


class IRecorder(Protocol):
    """Producer-facing logging API."""

    def record(
        self,
        kind: Kind | str,
        severity: Severity | str,
        message: str,
        activity_id: int = 0,
        parent_id: int = 0,
    ) -> None:
        """Admit one event. Never raises."""
        ...

    def close(self) -> None:
        """Release both sinks."""
        ...


def _timestamp_us() -> int:
    return time.monotonic_ns() // 1000


def _check_id(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if not 0 <= value < MAX_ID:
        raise ValueError(f"{name} out of 64-bit range: {value}")
    return value


class Recorder:
    """Assigns sequence ids and timestamps, then drives both sinks.

    A single lock covers identity assignment and both writes, so every
    consumer observes events in the same order. Either sink may be absent.
    """

    def __init__(
        self,
        log_file: str | Path | None = None,
        uds_path: str | Path | None = None,
        *,
        fsync: bool = True,
        sink: IDurableSink | None = None,
        channel: IPublishChannel | None = None,
    ):
        self._lock = threading.Lock()
        self._seq_id = 0
        self._sink = sink
        self._channel = channel

        if self._sink is None and log_file is not None:
            try:
                self._sink = FileSink(log_file, fsync=fsync)
            except OSError as e:
                logger.error("Failed to open log file %s, durable sink disabled: %s", log_file, e)

        if self._channel is None and uds_path is not None:
            try:
                self._channel = UnixDatagramChannel(uds_path)
            except (OSError, ValueError) as e:
                logger.error(
                    "Invalid live destination %s, publishing disabled: %s", uds_path, e
                )

    @property
    def durable(self) -> bool:
        """Whether a durable sink is configured."""
        return self._sink is not None

    @property
    def live(self) -> bool:
        """Whether a publish channel is configured."""
        return self._channel is not None

    def record(
        self,
        kind: Kind | str,
        severity: Severity | str,
        message: str,
        activity_id: int = 0,
        parent_id: int = 0,
    ) -> None:
        """Admit one event and write it to the configured sinks."""
        try:
            kind = Kind(kind)
            severity = Severity(severity)
            activity_id = _check_id(activity_id, "activity_id")
            parent_id = _check_id(parent_id, "parent_id")
            message = str(message)
        except (TypeError, ValueError) as e:
            logger.error("Rejected log event: %s", e)
            return

        with self._lock:
            self._seq_id += 1
            event = Event(
                kind=kind,
                severity=severity,
                timestamp=_timestamp_us(),
                activity_id=activity_id,
                sequence_id=self._seq_id,
                parent_id=parent_id,
                message=message,
            )

            if self._sink is not None:
                try:
                    self._sink.append(event)
                except Exception:
                    logger.exception(
                        "Durable sink raised for seq %s",
                        event.sequence_id,
                        extra={"context": {"seq_id": event.sequence_id}},
                    )

            if self._channel is not None:
                try:
                    self._channel.publish(encode_envelope(event))
                except Exception:
                    logger.exception(
                        "Publish channel raised for seq %s",
                        event.sequence_id,
                        extra={"context": {"seq_id": event.sequence_id}},
                    )

    def disable_live(self) -> None:
        """Stop publishing for the rest of the recorder's lifetime."""
        with self._lock:
            if self._channel is not None:
                self._channel.close()
                self._channel = None

    def close(self) -> None:
        """Close both sinks; later records only assign identities."""
        with self._lock:
            if self._sink is not None:
                self._sink.close()
                self._sink = None
            if self._channel is not None:
                self._channel.close()
                self._channel = None

    def __enter__(self) -> "Recorder":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
