"""Main entry point: serve the live event stream."""

import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from vslog.api import create_fastapi_app
from vslog.app import Application
from vslog.config import load_settings
from vslog.logging_config import setup_logging


def main():
    """Run the live bridge behind the websocket server."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    setup_logging()

    settings = load_settings()
    application = Application(settings)
    app = create_fastapi_app(application)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
