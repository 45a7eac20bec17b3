"""
Restore a JSON snapshot into the live store.
Run with: python -m scripts.restore_backup <backup-file> | --latest
"""

import argparse
import asyncio
import sys
from unitycure.config import get_settings
from unitycure.logging_config import configure_logging
from unitycure.services.backup_service import BackupService, RestoreService
from unitycure.store.initializer import initialize


async def restore(backup_path: str, latest: bool) -> bool:
    settings = get_settings()
    configure_logging(settings.log_level)

    if latest:
        backups = BackupService(settings.legacy_db_path, settings.backup_dir).list_backups()
        if not backups:
            print(f"No backups in {settings.backup_dir}")
            return False
        backup_path = str(backups[0])

    store = await initialize(settings)
    try:
        report = await RestoreService(store).restore(backup_path)
    finally:
        await store.dispose()

    for table, line in report.summary().items():
        print(f"  {table}: {line}")
    print(f"Restored {report.total} records from {backup_path}")
    return report.ok


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Restore a backup snapshot into the live store")
    parser.add_argument("backup", nargs="?", default="", help="Path to the backup JSON file")
    parser.add_argument("--latest", action="store_true", help="Restore the newest file in BACKUP_DIR")
    args = parser.parse_args()
    if not args.backup and not args.latest:
        parser.error("give a backup file or --latest")

    sys.exit(0 if asyncio.run(restore(args.backup, args.latest)) else 1)
