"""A whole discovered SQLite schema."""

from __future__ import annotations

from dataclasses import dataclass, field

from .column import IndexInfo
from .table import TableDef


@dataclass
class Schema:
    """The tables of a database and the indexes made by CREATE INDEX."""

    tables: list[TableDef] = field(default_factory=list)
    indexes: list[IndexInfo] = field(default_factory=list)

    def merge_indexes_into_table(self) -> Schema:
        """Add each unique index to the constraints of the table it belongs to."""
        for table in self.tables:
            table.constraints.extend(
                index
                for index in self.indexes
                if index.unique and index.table_name == table.name
            )
        return self