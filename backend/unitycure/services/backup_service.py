import base64
import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union
import aiofiles
from unitycure.exceptions import (
    BackupFileCorruptException, BackupFileNotFoundException, TableAbsentException,
)
from unitycure.schemas.migration import MigrationReport, TableOutcome
from unitycure.services.import_service import RowImporter
from unitycure.services.transforms import LEGACY_TABLES
from unitycure.store.handle import SQLiteStore, StoreHandle

logger = logging.getLogger(__name__)

BACKUP_PREFIX = "unitycure_backup_"


class BackupService:
    """Snapshots the legacy store into a JSON file of table -> legacy rows."""

    def __init__(self, legacy_path: Union[str, Path], backup_dir: Union[str, Path]):
        self.legacy_path = Path(legacy_path)
        self.backup_dir = Path(backup_dir)

    async def backup(self) -> Optional[Path]:
        if not self.legacy_path.exists():
            logger.info("No legacy store at %s, nothing to back up", self.legacy_path)
            return None

        legacy = SQLiteStore.open_readonly(self.legacy_path)
        snapshot: dict[str, list[dict]] = {}
        try:
            for table in LEGACY_TABLES:
                try:
                    snapshot[table] = await legacy.fetch_table(table)
                except TableAbsentException:
                    logger.info("Table %s not found, leaving it out of the backup", table)
                    continue
                logger.info("Backed up %d records from %s", len(snapshot[table]), table)
        finally:
            await legacy.dispose()

        self.backup_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S-%fZ")
        path = self.backup_dir / f"{BACKUP_PREFIX}{timestamp}.json"
        tmp_path = path.with_suffix(".json.tmp")

        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(snapshot, indent=2, default=_encode_value))
            await f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)

        logger.info("Backup created: %s", path)
        return path

    def list_backups(self) -> list[Path]:
        """Snapshot files in the backup directory, newest first."""
        if not self.backup_dir.is_dir():
            return []
        return sorted(self.backup_dir.glob(f"{BACKUP_PREFIX}*.json"), reverse=True)


def _encode_value(value):
    """JSON fallback for column values: BLOBs as base64 text, the rest as str."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    return str(value)


class RestoreService:
    """Replays a snapshot into the live store with the migration's transforms."""

    def __init__(self, store: StoreHandle):
        self.store = store
        self.importer = RowImporter(store.collections)

    async def load(self, backup_path: Union[str, Path]) -> dict[str, list[dict]]:
        """Read and validate a snapshot without touching the store."""
        path = Path(backup_path)
        if not path.is_file():
            raise BackupFileNotFoundException(str(path))

        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            raw = await f.read()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise BackupFileCorruptException(str(path), f"invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise BackupFileCorruptException(str(path), "top level is not an object")

        tables = {}
        for key, rows in data.items():
            if key not in LEGACY_TABLES:
                logger.info("Ignoring unrecognized backup key %s", key)
                continue
            if rows is None:
                continue
            if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
                raise BackupFileCorruptException(str(path), f"{key} is not a list of row objects")
            tables[key] = rows
        return tables

    async def restore(self, backup_path: Union[str, Path]) -> MigrationReport:
        tables = await self.load(backup_path)
        logger.info("Restoring from backup %s", backup_path)

        report = MigrationReport(source=str(backup_path))
        for table in LEGACY_TABLES:
            if table not in tables:
                continue
            outcome: TableOutcome = await self.importer.import_rows(table, tables[table])
            report.tables[table] = outcome
            logger.info("Restored %d %s (%d rejected)", outcome.records, table, len(outcome.errors))

        logger.info("Backup restoration completed: %s", report.summary())
        return report
