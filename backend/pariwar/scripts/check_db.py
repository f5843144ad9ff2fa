"""Print row counts for every table of the bill tracker."""

import asyncio
from typing import Dict

from sqlalchemy import func, select

from pariwar.core.config import get_settings
from pariwar.core.database import Store, StoreNotConfiguredError
from pariwar.models.tables import ALL_TABLES


async def count_rows(store: Store) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    async with store.session() as session:
        for model in ALL_TABLES:
            result = await session.execute(select(func.count()).select_from(model.__table__))
            counts[model.__tablename__] = result.scalar_one()
    return counts


async def check_db() -> None:
    settings = get_settings()
    if not settings.DATABASE_URL:
        raise StoreNotConfiguredError("DATABASE_URL not set")
    store = Store(settings.DATABASE_URL)
    try:
        counts = await count_rows(store)
    finally:
        await store.dispose()
    for name, total in counts.items():
        print(f"{name:<10} {total}")


if __name__ == "__main__":
    asyncio.run(check_db())
