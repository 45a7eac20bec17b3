"""
Snapshot the legacy SQLite store to a timestamped JSON file.
Run with: python -m scripts.backup_db [--list]
"""

import argparse
import asyncio
from unitycure.config import get_settings
from unitycure.logging_config import configure_logging
from unitycure.services.backup_service import BackupService


async def backup(list_only: bool):
    settings = get_settings()
    configure_logging(settings.log_level)
    service = BackupService(settings.legacy_db_path, settings.backup_dir)

    if list_only:
        for path in service.list_backups():
            print(path)
        return

    path = await service.backup()
    print(f"Backup written to {path}" if path else "No legacy database found to back up.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Back up the legacy SQLite store")
    parser.add_argument("--list", action="store_true", help="List existing backups, newest first")
    args = parser.parse_args()

    asyncio.run(backup(list_only=args.list))
