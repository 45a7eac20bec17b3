from pydantic import BaseModel
from typing import Literal, Optional

TableStatus = Literal["migrated", "skipped", "failed"]


class TableOutcome(BaseModel):
    table: str
    status: TableStatus = "migrated"
    records: int = 0
    errors: list[str] = []
    reason: Optional[str] = None


class MigrationReport(BaseModel):
    """Per-table result of a migration or restore run."""
    source: Optional[str] = None
    tables: dict[str, TableOutcome] = {}

    @property
    def ok(self) -> bool:
        return all(t.status != "failed" for t in self.tables.values())

    @property
    def total(self) -> int:
        return sum(t.records for t in self.tables.values())

    def summary(self) -> dict[str, str]:
        lines = {}
        for name, outcome in self.tables.items():
            if outcome.status == "migrated":
                lines[name] = f"{outcome.records} records" + (
                    f", {len(outcome.errors)} rejected" if outcome.errors else ""
                )
            elif outcome.status == "failed" and outcome.records:
                lines[name] = f"failed after {outcome.records} records: {outcome.reason}"
            else:
                lines[name] = f"{outcome.status}: {outcome.reason}"
        return lines
