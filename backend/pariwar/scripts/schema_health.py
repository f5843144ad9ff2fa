"""Schema health assertions.

Run against the configured database:
  python -m pariwar.scripts.schema_health

Checks:
  1. Exactly the five bill-tracker tables exist
  2. Each foreign-key column points at the expected table
"""
from __future__ import annotations

import asyncio
from typing import Dict, List, Set, Tuple

from sqlalchemy import inspect

from pariwar.core.config import get_settings
from pariwar.core.database import Store, StoreNotConfiguredError

EXPECTED_TABLES: Set[str] = {"families", "users", "documents", "billers", "bills"}

# (column, referred table) pairs per table
EXPECTED_FOREIGN_KEYS: Dict[str, Set[Tuple[str, str]]] = {
    "families": set(),
    "users": {("family_id", "families")},
    "documents": {("user_id", "users"), ("family_id", "families")},
    "billers": {("user_id", "users"), ("family_id", "families")},
    "bills": {("biller_id", "billers")},
}


def _collect(sync_conn) -> Tuple[Set[str], Dict[str, Set[Tuple[str, str]]]]:
    insp = inspect(sync_conn)
    tables = set(insp.get_table_names())
    fks: Dict[str, Set[Tuple[str, str]]] = {}
    for table in tables & EXPECTED_TABLES:
        fks[table] = {
            (col, fk["referred_table"])
            for fk in insp.get_foreign_keys(table)
            for col in fk["constrained_columns"]
        }
    return tables, fks


async def schema_problems(store: Store) -> List[str]:
    """Return a description of every deviation from the expected schema."""
    async with store.engine.connect() as conn:
        tables, fks = await conn.run_sync(_collect)

    problems: List[str] = []
    for missing in sorted(EXPECTED_TABLES - tables):
        problems.append(f"missing table {missing}")
    for extra in sorted(tables - EXPECTED_TABLES):
        problems.append(f"unexpected table {extra}")
    for table, expected in EXPECTED_FOREIGN_KEYS.items():
        if table not in fks:
            continue
        if fks[table] != expected:
            problems.append(f"{table}: foreign keys {sorted(fks[table])} != {sorted(expected)}")
    return problems


async def main() -> int:
    settings = get_settings()
    if not settings.DATABASE_URL:
        raise StoreNotConfiguredError("DATABASE_URL not set")
    store = Store(settings.DATABASE_URL)
    try:
        problems = await schema_problems(store)
    finally:
        await store.dispose()
    if problems:
        for p in problems:
            print(f"[fail] {p}")
        return 1
    print("Schema health OK.")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(asyncio.run(main()))
