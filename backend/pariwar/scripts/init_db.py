"""Initialize database tables."""

import asyncio

from pariwar.core.config import get_settings
from pariwar.core.database import Store, StoreNotConfiguredError


async def main() -> None:
    settings = get_settings()
    if not settings.DATABASE_URL:
        raise StoreNotConfiguredError("DATABASE_URL not set")
    store = Store(settings.DATABASE_URL, echo=settings.DB_ECHO)
    print(f"Initializing database tables on {store.masked_url}...")
    try:
        await store.auto_migrate()
    finally:
        await store.dispose()
    print("Database initialization complete!")


if __name__ == "__main__":
    asyncio.run(main())
