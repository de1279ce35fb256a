"""Database initialization script.

Run this script to create the snippet table.

Usage:
    python -m scripts.init_db
    or
    python scripts/init_db.py (after pip install -e .)
"""

import asyncio

from snippetbox.core.config import get_settings
from snippetbox.db.session import Database


async def main() -> None:
    """Initialize the database."""
    database = Database(get_settings())
    await database.open()
    await database.close()
    print("Database initialized successfully!")


if __name__ == "__main__":
    asyncio.run(main())
