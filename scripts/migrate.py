#!/usr/bin/env python3
"""Create the ledger tables without alembic and report what they hold.

Usage (after `pip install -e .`):
    python scripts/migrate.py
"""

import asyncio

from sqlalchemy import inspect

from icmbridge.config import get_settings
from icmbridge.ledger.database import close_db, get_db, get_engine, init_db
from icmbridge.ledger.repository import BridgeRepository


async def main() -> int:
    settings = get_settings()
    print(f"Ledger database: {settings._redact_url(settings.database_url)}")

    try:
        await init_db()

        async with get_engine().connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        print(f"Tables: {', '.join(sorted(tables))}")

        async with get_db() as session:
            repo = BridgeRepository(session)
            events = await repo.count_events()
            submissions = await repo.count_submissions()
            last_block = await repo.get_last_event_block()

        print(f"Recorded events: {events} (last block: {last_block if last_block is not None else '-'})")
        print(f"Submitted transactions: {submissions}")
    finally:
        await close_db()

    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
