#!/usr/bin/env python3
"""Initialize the database with tables."""

import asyncio
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.database import create_tables, reset_engine


async def init_db():
    """Create all tables."""
    print("Creating database tables...")

    await create_tables()
    print("✓ Tables created")

    await reset_engine()
    print("Database initialization complete!")


if __name__ == "__main__":
    asyncio.run(init_db())
