"""Observability API routes."""

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import Application


class StatusResponse(BaseModel):
    """Response model for bridge status."""

    state: str
    subscribers: int
    durable: bool
    live: bool


def create_observability_router(app: Application) -> APIRouter:
    """Create observability router."""
    router = APIRouter(prefix="/api", tags=["observability"])

    @router.get("/status", response_model=StatusResponse)
    async def get_status() -> dict:
        """Report bridge state and live subscriber count."""
        try:
            return {
                "state": app.bridge.state.value,
                "subscribers": len(await app.registry.snapshot()),
                "durable": app.recorder.durable,
                "live": app.recorder.live,
            }
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
