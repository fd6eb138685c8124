"""Entry point for the Campus Event Hub API server.

Starts the FastAPI application with Uvicorn.  Host, port and log
level come from the environment (``HOST``, ``PORT``, ``LOG_LEVEL``);
see ``campus_event_hub/app/core/config.py`` for all supported
variables.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from campus_event_hub.app.core.config import settings
from campus_event_hub.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Server stopped")
