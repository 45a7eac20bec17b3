"""
Initialize the database: pick a store, create all tables, import legacy data and seed.
Run with: python -m scripts.init_db
"""

import asyncio
from unitycure.bootstrap import bootstrap
from unitycure.config import get_settings
from unitycure.logging_config import configure_logging


async def init():
    settings = get_settings()
    configure_logging(settings.log_level)
    store = await bootstrap(settings)
    print(f"Database ready: {store.kind} at {store.location}")
    await store.dispose()


if __name__ == "__main__":
    asyncio.run(init())
