"""Pydantic schemas for API responses.

Schemas are kept separate from the ORM models in ``tables`` so the shape
exposed over HTTP can differ from what is stored.  Bill listings use
PascalCase keys on the wire (``ProviderName``, ``Amount``...) while the
Python attributes stay snake_case.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class HealthStatus(BaseModel):
    status: str = "OK"


class BillSummary(BaseModel):
    """One entry of the bills listing."""

    model_config = ConfigDict(populate_by_name=True)

    provider_name: str = Field(alias="ProviderName")
    amount: Decimal = Field(alias="Amount", decimal_places=2)
    due_date: str = Field(alias="DueDate")
    is_paid: bool = Field(alias="IsPaid")

    @field_serializer("amount")
    def _amount_as_number(self, amount: Decimal) -> float:
        # Clients expect a JSON number, not pydantic's default decimal string.
        return float(amount)
