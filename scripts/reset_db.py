"""Database reset script.

Run this script to drop all tables and recreate them.
This will delete all snippets.

Usage:
    python -m scripts.reset_db
    or
    python scripts/reset_db.py (after pip install -e .)
"""

import asyncio

from snippetbox.core.config import get_settings
from snippetbox.db.session import Database


async def main() -> None:
    """Reset the database by dropping all tables and recreating them."""
    database = Database(get_settings())
    await database.open()

    try:
        print("Dropping all database tables...")
        await database.drop_all_tables()
        print("All tables dropped successfully!")

        print("Recreating tables...")
        await database.create_all_tables()
        print("Database reinitialized successfully!")
    finally:
        await database.close()


if __name__ == "__main__":
    asyncio.run(main())
