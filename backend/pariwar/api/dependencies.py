"""Common dependencies for FastAPI routes.

Everything a handler needs is looked up on ``request.app.state``, where
``create_app`` places the (optional) store and the bill
service.  Tests can swap any of them with ``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Request

from pariwar.core.database import Store
from pariwar.services.bill_service import BillService


def get_store(request: Request) -> Optional[Store]:
    """Return the application's store, or None when running without a database."""
    return getattr(request.app.state, "store", None)


def get_bill_service(request: Request) -> BillService:
    return request.app.state.bill_service
