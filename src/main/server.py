"""
Server Entry Point - Main Layer

This module runs the FastAPI application under uvicorn with the host,
port and reload flags taken from the application settings.
"""

import uvicorn

from src.main.config import get_settings
from src.shared import configure_logging, get_logger, update_logging_from_settings

configure_logging()

settings = get_settings()

update_logging_from_settings(settings)

logger = get_logger(__name__)


def server_options() -> dict:
    """Build the keyword arguments handed to ``uvicorn.run``."""
    settings = get_settings()
    level = (
        settings.logging.level.value
        if hasattr(settings.logging.level, "value")
        else settings.logging.level
    )
    return {
        "host": settings.ge.host,
        "port": settings.ge.port,
        "reload": settings.ge.reload,
        "log_level": str(level).lower(),
        "log_config": None,
    }


def main():
    """Main entry point for the HTTP server."""

    options = server_options()
    logger.info(
        "server.starting",
        host=options["host"],
        port=options["port"],
        reload=options["reload"],
    )

    uvicorn.run("src.main.app:app", **options)


if __name__ == "__main__":
    main()
