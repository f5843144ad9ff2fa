"""Run the API server with uvicorn on the configured host and port."""

from __future__ import annotations

import logging

import uvicorn

from pariwar.core.config import Settings, get_settings
from pariwar.core.observability import configure_logging

logger = logging.getLogger("pariwar")


def serve(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)
    logger.info("Starting %s server...", settings.PROJECT_NAME)

    from pariwar.api import main as api_main

    # Reuse the module-level app when it was built from these same settings.
    if api_main.app.state.settings is settings:
        app = api_main.app
    else:
        app = api_main.create_app(settings)
    logger.info("Server starting on port %s", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


def main() -> None:
    serve()


if __name__ == "__main__":  # pragma: no cover
    main()
