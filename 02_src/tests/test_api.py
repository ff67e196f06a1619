"""Tests for the websocket transport and status route."""

import json
import time

import pytest
from fastapi.testclient import TestClient

from vslog.api import create_fastapi_app
from vslog.app import Application
from vslog.config import Settings
from vslog.models import Kind, Severity


@pytest.fixture
def application(log_path):
    """Create an application with both sinks."""
    return Application(Settings(log_file=log_path))


@pytest.fixture
def client(application):
    """HTTP client running the app lifespan."""
    with TestClient(create_fastapi_app(application)) as c:
        yield c


def wait_for_subscribers(client, count, timeout=2.0):
    deadline = time.monotonic() + timeout
    while client.get("/api/status").json()["subscribers"] != count:
        if time.monotonic() > deadline:
            raise AssertionError(f"expected {count} subscribers")
        time.sleep(0.01)


class TestStatusRoute:
    """Tests for GET /api/status."""

    def test_status(self, client):
        """Test the idle status payload."""
        response = client.get("/api/status")
        assert response.status_code == 200
        assert response.json() == {
            "state": "listening",
            "subscribers": 0,
            "durable": True,
            "live": True,
        }


class TestLiveRoute:
    """Tests for WS /ws."""

    def test_subscriber_receives_envelope(self, client, application):
        """Test that a connected viewer receives recorded events."""
        with client.websocket_connect("/ws") as ws:
            wait_for_subscribers(client, 1)
            application.record(Kind.WARNING, Severity.MID, "disk at 91%", activity_id=42)

            envelope = json.loads(ws.receive_text())
            assert envelope["type"] == "WARNING"
            assert envelope["severity"] == "MID"
            assert envelope["activity_uuid"] == "42"
            assert envelope["seq_id"] == 1

    def test_every_viewer_gets_a_copy(self, client, application):
        """Test fan-out across two websocket connections."""
        with client.websocket_connect("/ws") as first, client.websocket_connect("/ws") as second:
            wait_for_subscribers(client, 2)
            application.record(Kind.INFO, Severity.LOW, "hello")

            assert json.loads(first.receive_text())["message"] == "hello"
            assert json.loads(second.receive_text())["message"] == "hello"

    def test_disconnect_unregisters(self, client):
        """Test that closing the socket removes the subscriber."""
        with client.websocket_connect("/ws"):
            wait_for_subscribers(client, 1)
        wait_for_subscribers(client, 0)

    def test_client_frames_are_ignored(self, client, application):
        """Test that text and binary frames from a viewer keep it connected."""
        with client.websocket_connect("/ws") as ws:
            wait_for_subscribers(client, 1)
            ws.send_bytes(b"\x00\xff")
            ws.send_text("ping")
            application.record(Kind.OK, Severity.NONE, "still here")

            assert json.loads(ws.receive_text())["message"] == "still here"
            wait_for_subscribers(client, 1)
        wait_for_subscribers(client, 0)
