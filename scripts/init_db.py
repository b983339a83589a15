"""Create (or recreate) every table directly from the table definitions.

Intended for SQLite development databases; PostgreSQL deployments use
``scripts/migrate.py``.

Usage:
    python scripts/init_db.py
    python scripts/init_db.py --drop
"""

import argparse
import asyncio

from app.database import engine
from app.models import metadata


async def init_db(drop: bool) -> None:
    """Create all tables, dropping existing ones first when asked."""
    async with engine.begin() as conn:
        if drop:
            await conn.run_sync(metadata.drop_all)
        await conn.run_sync(metadata.create_all)
    await engine.dispose()

    print(f"✓ Created tables: {', '.join(sorted(metadata.tables))}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create database tables")
    parser.add_argument("--drop", action="store_true", help="Drop existing tables first")
    asyncio.run(init_db(parser.parse_args().drop))
