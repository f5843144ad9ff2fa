"""Bill listing services.

Route handlers depend on the :class:`BillService` interface only, so the
mock and the database-backed implementation are interchangeable without
touching routing code.  Which one the application uses is decided once
at startup by :func:`build_bill_service`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select

from pariwar.core.config import Settings
from pariwar.core.database import Store, StoreNotConfiguredError
from pariwar.models.schemas import BillSummary
from pariwar.models.tables import Bill, Biller


class BillService(ABC):
    """Capability: list the bills visible to a user."""

    @abstractmethod
    async def list_bills(self, user_id: Optional[int] = None) -> List[BillSummary]:
        """Return bills for ``user_id``, or for everyone when it is None."""


class MockBillService(BillService):
    """Serves a fixed pair of bills regardless of user or stored state."""

    async def list_bills(self, user_id: Optional[int] = None) -> List[BillSummary]:
        # Built per call so no response object is shared between requests.
        return [
            BillSummary(
                provider_name="Telangana Electricity",
                amount=Decimal("1245.00"),
                due_date="2025-09-15",
                is_paid=False,
            ),
            BillSummary(
                provider_name="Airtel Postpaid",
                amount=Decimal("499.00"),
                due_date="2025-08-20",
                is_paid=True,
            ),
        ]


class DatabaseBillService(BillService):
    """Reads bills joined with their billers from the store."""

    def __init__(self, store: Store) -> None:
        self.store = store

    async def list_bills(self, user_id: Optional[int] = None) -> List[BillSummary]:
        bills = Bill.__table__.c
        billers = Biller.__table__.c
        stmt = (
            select(billers.provider_name, bills.amount, bills.due_date, bills.is_paid)
            .select_from(Bill.__table__.join(Biller.__table__, bills.biller_id == billers.id))
            .where(bills.deleted_at.is_(None), billers.deleted_at.is_(None))
            .order_by(bills.id)
        )
        if user_id is not None:
            stmt = stmt.where(billers.user_id == user_id)
        async with self.store.session() as session:
            rows = (await session.execute(stmt)).all()
        return [
            BillSummary(
                provider_name=row.provider_name,
                amount=Decimal(row.amount),
                due_date=row.due_date,
                is_paid=row.is_paid,
            )
            for row in rows
        ]


def build_bill_service(settings: Settings, store: Optional[Store]) -> BillService:
    """Pick the bill service named by ``BILLS_BACKEND``."""
    if settings.BILLS_BACKEND == "database":
        if store is None:
            raise StoreNotConfiguredError("BILLS_BACKEND=database requires DATABASE_URL to be set")
        return DatabaseBillService(store)
    return MockBillService()
