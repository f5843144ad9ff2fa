"""Entry point for the FastAPI application.

``create_app`` builds the application from an explicit ``Settings``
instance.  On startup the lifespan handler opens the store (subject to
``STARTUP_MODE``) and, for the database backend, builds the bill
service.  The mock service is installed when the app is built.  Both live
on ``app.state`` and reach the handlers through dependencies.  A store or
bill service passed to ``create_app`` is used as-is instead.

The module-level ``app`` is what uvicorn serves::

    uvicorn pariwar.api.main:app --port 8080
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from pariwar.api.dependencies import get_store
from pariwar.api.error_handlers import generic_exception_handler, validation_exception_handler
from pariwar.api.routes.bills import router as bills_router
from pariwar.api.routes.health import router as health_router
from pariwar.core.config import Settings, get_settings
from pariwar.core.database import Store, open_store
from pariwar.core.observability import configure_logging, init_sentry
from pariwar.services.bill_service import BillService, MockBillService, build_bill_service

logger = logging.getLogger(__name__)

_DEV_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    settings: Settings = app.state.settings
    # Startup
    logger.info("Starting up %s (%s mode)...", settings.PROJECT_NAME, settings.STARTUP_MODE)
    if init_sentry(settings, "api"):
        logger.info("Sentry SDK initialized (api)")

    owns_store = app.state.store is None
    owns_service = app.state.bill_service is None
    if owns_store:
        app.state.store = await open_store(settings)
    try:
        if owns_service:
            app.state.bill_service = build_bill_service(settings, app.state.store)
        logger.info("Serving bills from %s", type(app.state.bill_service).__name__)
        yield
    finally:
        # Shutdown
        logger.info("Shutting down...")
        if owns_service:
            app.state.bill_service = None
        if owns_store and app.state.store is not None:
            await app.state.store.dispose()
            app.state.store = None


def _cors_origins(settings: Settings) -> list[str]:
    """CORS configuration.

    Logic:
    1. In development => allow all ( * ) for simplest DX.
    2. Otherwise start from BACKEND_CORS_ORIGINS and make sure the common
       localhost dev origins are present.
    3. Deduplicate while preserving order.
    """
    if settings.is_development:
        return ["*"]
    origins = [o for o in (settings.BACKEND_CORS_ORIGINS or []) if urlparse(o).scheme]
    for dev_origin in _DEV_ORIGINS:
        if dev_origin not in origins:
            origins.append(dev_origin)
    seen: set[str] = set()
    return [o for o in origins if not (o in seen or seen.add(o))]


def create_app(
    settings: Optional[Settings] = None,
    *,
    store: Optional[Store] = None,
    bill_service: Optional[BillService] = None,
) -> FastAPI:
    """Build the API application."""
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=f"{settings.PROJECT_NAME} API",
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    # The mock needs no startup work, so it is available even without the lifespan.
    if bill_service is None and settings.BILLS_BACKEND == "mock":
        bill_service = MockBillService()
    app.state.bill_service = bill_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(settings),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register custom exception handlers
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # Include routers
    app.include_router(health_router)
    app.include_router(bills_router, prefix=settings.API_V1_STR)

    @app.get("/")
    async def root() -> Dict[str, str]:
        """Root endpoint."""
        return {"message": f"Welcome to the {settings.PROJECT_NAME} API"}

    if settings.is_development:

        @app.get("/debug/db")
        async def db_debug(store: Optional[Store] = Depends(get_store)) -> Dict[str, Any]:
            """Return non-sensitive DB diagnostics (for development)."""
            info: Dict[str, Any] = {
                "configured": store is not None,
                "startup_mode": settings.STARTUP_MODE,
                "bills_backend": settings.BILLS_BACKEND,
            }
            if store is not None:
                info.update(store.debug_info())
                info["tables"] = await store.table_names()
            return info

    return app


app = create_app()
