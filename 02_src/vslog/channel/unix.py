"""Unix datagram socket transport for live envelopes."""

import asyncio
import os
import socket
from pathlib import Path

from ..logging_config import get_logger
from .envelope import MAX_ENVELOPE_BYTES

logger = get_logger(__name__)

# sockaddr_un.sun_path holds 108 bytes including the terminating NUL
MAX_SOCKET_PATH = 107


def validate_socket_path(path: str | Path) -> Path:
    """Check that a path can be used as a Unix socket address."""
    if not str(path):
        raise ValueError("Socket path must not be empty")
    if len(os.fsencode(path)) > MAX_SOCKET_PATH:
        raise ValueError(f"Socket path too long ({MAX_SOCKET_PATH} bytes max): {path}")
    return Path(path)


class UnixDatagramChannel:
    """Non-blocking datagram sender, drops on any failure."""

    def __init__(self, path: str | Path):
        if not hasattr(socket, "AF_UNIX"):
            raise OSError("Unix domain sockets are not supported on this platform")
        self._path = validate_socket_path(path)
        self._sock: socket.socket | None = socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM)
        self._sock.setblocking(False)
        self._failing = False

    @property
    def path(self) -> Path:
        """Destination socket address."""
        return self._path

    def publish(self, payload: bytes) -> bool:
        """Send one datagram; a missing peer or full buffer drops it."""
        if self._sock is None:
            return False

        try:
            self._sock.sendto(payload, str(self._path))
        except OSError as e:
            if not self._failing:
                logger.warning(
                    "Live publish to %s failed, dropping: %s",
                    self._path,
                    e,
                    extra={"context": {"socket": str(self._path)}},
                )
                self._failing = True
            else:
                logger.debug("Live publish to %s still failing: %s", self._path, e)
            return False

        if self._failing:
            logger.info(
                "Live publish to %s recovered",
                self._path,
                extra={"context": {"socket": str(self._path)}},
            )
            self._failing = False
        return True

    def close(self) -> None:
        """Close the sending socket."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None


class UnixDatagramSource:
    """Bound datagram socket the bridge receives envelopes from."""

    def __init__(self, path: str | Path, max_datagram: int = MAX_ENVELOPE_BYTES):
        self._path = validate_socket_path(path)
        self._max_datagram = max_datagram
        self._sock: socket.socket | None = None

    @property
    def path(self) -> Path:
        """Bound socket address."""
        return self._path

    async def open(self) -> None:
        """Bind the socket, replacing a stale socket file."""
        if self._sock is not None:
            return

        if self._path.is_socket():
            self._path.unlink()

        sock = socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM)
        try:
            sock.bind(str(self._path))
        except OSError:
            sock.close()
            raise
        sock.setblocking(False)
        self._sock = sock
        logger.info("Listening for live events on %s", self._path)

    async def receive(self) -> bytes:
        """Wait for the next datagram."""
        if self._sock is None:
            raise RuntimeError("Source not opened")
        loop = asyncio.get_running_loop()
        return await loop.sock_recv(self._sock, self._max_datagram)

    async def close(self) -> None:
        """Close and unlink the socket."""
        if self._sock is None:
            return
        self._sock.close()
        self._sock = None
        try:
            self._path.unlink()
        except FileNotFoundError:
            pass
