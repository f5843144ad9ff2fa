"""API routes for bills.

The handler stays thin: it asks the injected :class:`BillService` for the
listing and returns it as-is.  Whether the data is mocked or read from
the store is decided when the application is built.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from pariwar.api.dependencies import get_bill_service
from pariwar.models.schemas import BillSummary
from pariwar.services.bill_service import BillService

router = APIRouter(prefix="/bills", tags=["bills"])


@router.get("", response_model=List[BillSummary])
async def list_bills(service: BillService = Depends(get_bill_service)) -> List[BillSummary]:
    """List the household's bills."""
    return await service.list_bills()
