import logging
from typing import Iterable
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from unitycure.exceptions import RowTransformException, UserExistsException
from unitycure.schemas.migration import TableOutcome
from unitycure.services.transforms import UPSERT_TABLES, transform_row
from unitycure.store.collections import Collections

logger = logging.getLogger(__name__)


class RowImporter:
    """Writes legacy-shaped rows into the document collections, one row at a time."""

    def __init__(self, collections: Collections):
        self.collections = collections

    async def import_rows(self, table: str, rows: Iterable[dict]) -> TableOutcome:
        collection = self.collections.for_table(table)
        outcome = TableOutcome(table=table)

        index = 0
        try:
            for index, row in enumerate(rows):
                try:
                    document = collection.validate(transform_row(table, row))
                    if table in UPSERT_TABLES:
                        await collection.upsert(document)
                    else:
                        await collection.insert(document)
                except (RowTransformException, ValidationError, UserExistsException, SQLAlchemyError) as e:
                    message = f"row {index}: {_describe(e)}"
                    outcome.errors.append(message)
                    logger.warning("%s %s", table, message)
                    continue
                outcome.records += 1
        except Exception as e:
            # Rows written before the failure stay in the store and in the count
            outcome.status = "failed"
            outcome.reason = f"row {index}: {_describe(e)}"
            logger.error("Import of %s stopped after %d records: %s", table, outcome.records, outcome.reason)

        return outcome


def _describe(error: Exception) -> str:
    if isinstance(error, ValidationError):
        return "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in error.errors()
        )
    if isinstance(error, RowTransformException):
        return error.reason
    return f"{type(error).__name__}: {error}"
