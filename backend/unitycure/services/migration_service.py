import asyncio
import logging
from pathlib import Path
from typing import Union
from unitycure.exceptions import TableAbsentException
from unitycure.schemas.migration import MigrationReport, TableOutcome
from unitycure.services.import_service import RowImporter
from unitycure.services.transforms import LEGACY_TABLES
from unitycure.store.handle import SQLiteStore, StoreHandle

logger = logging.getLogger(__name__)


class MigrationService:
    """One-time import of the legacy SQLite file into the live store."""

    def __init__(self, store: StoreHandle):
        self.store = store
        self.importer = RowImporter(store.collections)

    async def migrate_legacy(self, legacy_path: Union[str, Path]) -> MigrationReport:
        path = Path(legacy_path)
        if not path.exists():
            logger.info("No legacy store at %s, skipping migration", path)
            return MigrationReport()

        logger.info("Migrating legacy store %s", path)
        legacy = SQLiteStore.open_readonly(path)
        try:
            # Tables are independent; one failing must not discard the others
            results = await asyncio.gather(
                *(self._migrate_table(legacy, table) for table in LEGACY_TABLES),
                return_exceptions=True,
            )
        finally:
            await legacy.dispose()

        report = MigrationReport(source=str(path))
        for table, result in zip(LEGACY_TABLES, results):
            if isinstance(result, TableOutcome):
                report.tables[table] = result
            elif isinstance(result, Exception):
                logger.error("Migration of %s failed: %s", table, result)
                report.tables[table] = TableOutcome(
                    table=table, status="failed", reason=f"{type(result).__name__}: {result}"
                )
            else:
                raise result

        logger.info("Legacy migration finished: %s", report.summary())
        return report

    async def _migrate_table(self, legacy: StoreHandle, table: str) -> TableOutcome:
        try:
            rows = await legacy.fetch_table(table)
        except TableAbsentException:
            logger.info("Legacy table %s not found, skipping", table)
            return TableOutcome(table=table, status="skipped", reason="table not found")

        outcome = await self.importer.import_rows(table, rows)
        logger.info("Migrated %d %s (%d rejected)", outcome.records, table, len(outcome.errors))
        return outcome
