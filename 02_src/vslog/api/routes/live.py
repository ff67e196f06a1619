"""Live websocket route."""

from fastapi import APIRouter, WebSocket

from ...app import Application
from ...bridge import WebSocketSubscriber
from ...logging_config import get_logger

logger = get_logger(__name__)


def create_live_router(app: Application) -> APIRouter:
    """Create live stream router."""
    router = APIRouter(tags=["live"])

    @router.websocket("/ws")
    async def live_stream(websocket: WebSocket) -> None:
        """Register the connection and keep it until the client leaves."""
        await websocket.accept()
        subscriber = WebSocketSubscriber(websocket)
        await app.registry.register(subscriber)
        try:
            # Incoming text or binary frames are ignored; reading detects disconnects.
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    logger.debug("Subscriber %s disconnected", subscriber.name)
                    break
        finally:
            await app.registry.unregister(subscriber)

    return router
