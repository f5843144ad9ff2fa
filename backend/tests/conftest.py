from __future__ import annotations

import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add backend folder to sys.path so `import pariwar...` works in tests when running from backend root
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from pariwar.core.config import Settings  # noqa: E402
from pariwar.core.database import Store  # noqa: E402


@pytest.fixture
def make_settings():
    """Build Settings isolated from the caller's DATABASE_URL / mode variables."""

    def _make(**overrides) -> Settings:
        values = {
            "DATABASE_URL": None,
            "STARTUP_MODE": "demo",
            "BILLS_BACKEND": "mock",
            "ENVIRONMENT": "development",
            "SENTRY_DSN": None,
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def sqlite_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'pariwar.db'}"


@pytest_asyncio.fixture
async def store(sqlite_url):
    s = Store(sqlite_url)
    await s.auto_migrate()
    try:
        yield s
    finally:
        await s.dispose()
