"""Health check endpoints for monitoring."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from pariwar.api.dependencies import get_store
from pariwar.core.database import Store
from pariwar.models.schemas import HealthStatus

router = APIRouter(tags=["health"])


@router.api_route("/health", methods=["GET", "HEAD"], response_model=HealthStatus)
async def health_check() -> HealthStatus:
    """Health check endpoint (supports GET & HEAD)."""
    return HealthStatus(status="OK")


@router.get("/health/detailed")
async def detailed_health_check(store: Optional[Store] = Depends(get_store)) -> Dict[str, Any]:
    """Health check with database status."""
    health_status: Dict[str, Any] = {"status": "OK", "services": {}}

    if store is None:
        health_status["services"]["database"] = "not configured"
        return health_status

    try:
        await store.ping()
        health_status["services"]["database"] = "healthy"
    except SQLAlchemyError as e:
        health_status["services"]["database"] = f"unhealthy: {e}"
        health_status["status"] = "degraded"
    return health_status
