from __future__ import annotations

import importlib
import warnings

import sentry_sdk
from fastapi.testclient import TestClient

from pariwar.api.main import create_app


def test_unhandled_error_returns_json_500(make_settings):
    app = create_app(make_settings())

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    client = TestClient(app, raise_server_exceptions=False)
    resp = client.get("/boom")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error", "details": "kaboom"}


def test_validation_error_shape(make_settings):
    app = create_app(make_settings())

    @app.get("/items/{item_id}")
    async def item(item_id: int):
        return {"id": item_id}

    client = TestClient(app)
    resp = client.get("/items/not-a-number")
    assert resp.status_code == 422
    body = resp.json()
    assert body["error"] == "Validation error"
    assert body["details"][0]["loc"] == ["path", "item_id"]


def test_unhandled_error_is_reported_to_sentry(make_settings, monkeypatch):
    captured = []
    monkeypatch.setattr(sentry_sdk, "capture_exception", lambda exc: captured.append(exc))
    app = create_app(make_settings(SENTRY_DSN="https://public@o0.ingest.sentry.io/1"))

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    client = TestClient(app, raise_server_exceptions=False)
    assert client.get("/boom").status_code == 500
    assert len(captured) == 1
    assert str(captured[0]) == "kaboom"


def test_unhandled_error_not_reported_without_dsn(make_settings, monkeypatch):
    captured = []
    monkeypatch.setattr(sentry_sdk, "capture_exception", lambda exc: captured.append(exc))
    app = create_app(make_settings())

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    TestClient(app, raise_server_exceptions=False).get("/boom")
    assert captured == []


def test_error_handlers_import_without_deprecation_warnings():
    import pariwar.api.error_handlers as handlers

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        importlib.reload(handlers)
    assert not [w for w in caught if issubclass(w.category, DeprecationWarning)]
