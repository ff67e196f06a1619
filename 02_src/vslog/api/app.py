"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..app import Application
from .routes import live, observability


# Global application instance
_app: Application | None = None


def get_app() -> Application:
    """Get the global application instance."""
    global _app
    if not _app:
        _app = Application()
    return _app


def create_fastapi_app(application: Application | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    application = application if application is not None else get_app()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Run the fan-out bridge for the lifetime of the server."""
        await application.start()
        yield
        await application.stop()

    fastapi_app = FastAPI(
        title="vslog",
        description="Live structured event stream",
        version="0.2.2",
        lifespan=lifespan,
    )

    fastapi_app.include_router(live.create_live_router(application))
    fastapi_app.include_router(observability.create_observability_router(application))

    return fastapi_app
