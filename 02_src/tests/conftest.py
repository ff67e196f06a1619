"""Pytest configuration and fixtures."""

import sys
import tempfile
from pathlib import Path

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def log_path(tmp_path):
    """Path for a durable event log."""
    return tmp_path / "events.log"


@pytest.fixture
def socket_path():
    """Short socket path (sun_path is limited to 107 bytes)."""
    with tempfile.TemporaryDirectory(prefix="vslog-") as tmp:
        yield Path(tmp) / "live.sock"


@pytest.fixture
def registry():
    """Create an empty subscriber registry."""
    from vslog.bridge import SubscriberRegistry

    return SubscriberRegistry()


@pytest.fixture
def source():
    """Create an in-process event source."""
    from vslog.channel import InProcessSource

    return InProcessSource()


@pytest.fixture
def channel(source):
    """Create an in-process channel feeding the source."""
    from vslog.channel import InProcessChannel

    return InProcessChannel(source)


@pytest_asyncio.fixture
async def bridge(source, registry):
    """Create and start a fan-out bridge over the in-process source."""
    from vslog.bridge import FanoutBridge

    br = FanoutBridge(source, registry, send_timeout=0.2, receive_backoff=0.01)
    await br.start()
    yield br
    await br.stop()


@pytest.fixture
def read_lines(log_path):
    """Read persisted lines as records."""
    from vslog.storage import parse_line

    def _read():
        with open(log_path, "r", encoding="utf-8", newline="\n") as f:
            return [parse_line(line) for line in f]

    return _read
