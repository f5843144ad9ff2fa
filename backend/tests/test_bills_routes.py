from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from pariwar.api.main import create_app
from pariwar.models.schemas import BillSummary
from pariwar.models.tables import Bill, Biller, Family, User
from pariwar.services.bill_service import BillService, MockBillService


def _seed(sqlite_url: str, bills: int) -> None:
    engine = create_engine(sqlite_url)
    with Session(engine) as session:
        family = Family(name="Reddy")
        user = User(phone_number="+919000000001", family=family)
        biller = Biller(user=user, family=family, provider_name="Hyderabad Water", consumer_id="HW-1")
        for i in range(bills):
            session.add(Bill(biller=biller, amount=Decimal("100.00") + i, due_date=f"2025-10-0{i + 1}", is_paid=False))
        session.commit()
    engine.dispose()


def test_list_bills_returns_two_mock_entries(make_settings):
    with TestClient(create_app(make_settings())) as client:
        resp = client.get("/api/v1/bills")
    assert resp.status_code == 200
    data = resp.json()
    assert isinstance(data, list)
    assert len(data) == 2
    assert data[0] == {
        "ProviderName": "Telangana Electricity",
        "Amount": 1245.0,
        "DueDate": "2025-09-15",
        "IsPaid": False,
    }
    assert data[1] == {
        "ProviderName": "Airtel Postpaid",
        "Amount": 499.0,
        "DueDate": "2025-08-20",
        "IsPaid": True,
    }


def test_amount_is_a_json_number(make_settings):
    with TestClient(create_app(make_settings())) as client:
        raw = client.get("/api/v1/bills").text
    assert '"Amount":1245.0' in raw
    assert '"Amount":499.0' in raw


def test_mock_listing_ignores_stored_bills(make_settings, sqlite_url):
    settings = make_settings(DATABASE_URL=sqlite_url)
    with TestClient(create_app(settings)) as client:
        _seed(sqlite_url, bills=3)
        resp = client.get("/api/v1/bills?user_id=1")
    assert resp.status_code == 200
    assert len(resp.json()) == 2


def test_database_backend_serves_stored_bills(make_settings, sqlite_url):
    settings = make_settings(DATABASE_URL=sqlite_url, BILLS_BACKEND="database")
    with TestClient(create_app(settings)) as client:
        _seed(sqlite_url, bills=3)
        resp = client.get("/api/v1/bills")
    assert resp.status_code == 200
    data = resp.json()
    assert [b["DueDate"] for b in data] == ["2025-10-01", "2025-10-02", "2025-10-03"]
    assert {b["ProviderName"] for b in data} == {"Hyderabad Water"}
    assert data[2]["Amount"] == 102.0


def test_injected_bill_service_replaces_mock(make_settings):
    class OneBill(BillService):
        async def list_bills(self, user_id: Optional[int] = None) -> List[BillSummary]:
            return [BillSummary(provider_name="Test Gas", amount=Decimal("10.50"), due_date="soon", is_paid=False)]

    with TestClient(create_app(make_settings(), bill_service=OneBill())) as client:
        data = client.get("/api/v1/bills").json()
    assert data == [{"ProviderName": "Test Gas", "Amount": 10.5, "DueDate": "soon", "IsPaid": False}]


def test_mock_bills_are_fresh_per_call():
    import asyncio

    svc = MockBillService()
    first = asyncio.run(svc.list_bills())
    first[0].is_paid = True
    second = asyncio.run(svc.list_bills())
    assert second[0].is_paid is False


def test_list_bills_without_lifespan(make_settings):
    client = TestClient(create_app(make_settings()))
    resp = client.get("/api/v1/bills")
    assert resp.status_code == 200
    assert [b["ProviderName"] for b in resp.json()] == ["Telangana Electricity", "Airtel Postpaid"]
