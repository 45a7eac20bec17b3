"""
Import the legacy SQLite store into the live store.
Run with: python -m scripts.migrate_legacy [--legacy-path unitycure.db]
"""

import argparse
import asyncio
import sys
from unitycure.config import get_settings
from unitycure.logging_config import configure_logging
from unitycure.services.migration_service import MigrationService
from unitycure.store.initializer import initialize


async def migrate(legacy_path: str) -> bool:
    settings = get_settings()
    configure_logging(settings.log_level)
    store = await initialize(settings)
    try:
        report = await MigrationService(store).migrate_legacy(legacy_path or settings.legacy_db_path)
    finally:
        await store.dispose()

    for table, line in report.summary().items():
        print(f"  {table}: {line}")
    print(f"Migrated {report.total} records" if report.tables else "Nothing to migrate.")
    return report.ok


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Migrate legacy SQLite data into the live store")
    parser.add_argument("--legacy-path", default="", help="Legacy database file (defaults to LEGACY_DB_PATH)")
    args = parser.parse_args()

    sys.exit(0 if asyncio.run(migrate(args.legacy_path)) else 1)
