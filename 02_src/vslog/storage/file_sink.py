"""Append-only file sink for durable event history."""

import os
from pathlib import Path
from typing import Protocol, TextIO

from ..logging_config import get_logger
from ..models import Event
from .line_format import format_line

logger = get_logger(__name__)


class IDurableSink(Protocol):
    """Persistent, ordered, append-only destination for events."""

    def append(self, event: Event) -> bool:
        """Append one event. Returns False on failure, never raises."""
        ...

    def close(self) -> None:
        """Release the destination."""
        ...


class FileSink:
    """Writes one line per event to an append-only file."""

    def __init__(self, path: str | Path, fsync: bool = True):
        self._path = Path(path)
        self._fsync = fsync
        # Raises OSError when the destination cannot be opened.
        self._file: TextIO | None = open(
            self._path, "a", encoding="utf-8", newline="\n"
        )

    @property
    def path(self) -> Path:
        """Destination path."""
        return self._path

    def append(self, event: Event) -> bool:
        """Append one event and flush it to disk before returning."""
        if self._file is None:
            logger.warning(
                "Durable sink %s is closed, dropping seq %s",
                self._path,
                event.sequence_id,
            )
            return False

        try:
            self._file.write(format_line(event))
            self._file.flush()
            if self._fsync:
                os.fsync(self._file.fileno())
        except (OSError, ValueError) as e:
            logger.warning(
                "Durable write failed for seq %s to %s: %s",
                event.sequence_id,
                self._path,
                e,
                extra={"context": {"seq_id": event.sequence_id, "path": str(self._path)}},
            )
            return False
        return True

    def close(self) -> None:
        """Close the file."""
        if self._file is not None:
            try:
                self._file.close()
            except OSError as e:
                logger.warning("Error closing durable sink %s: %s", self._path, e)
            self._file = None
