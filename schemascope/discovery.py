"""Discover the schema of an SQLite database."""

from __future__ import annotations

import sqlite3

from .column import IndexInfo
from .executor import Executor
from .schema import Schema
from .table import TableDef

_TABLES_QUERY = (
    'SELECT "name" FROM "sqlite_master" WHERE "type" = ? AND "name" <> ?'
)
_TABLES_PARAMS = ("table", "sqlite_sequence")


class SchemaDiscovery:
    """Reads tables, columns, keys and indexes from an SQLite connection."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self.executor = Executor(connection)

    def discover(self) -> Schema:
        """Discover every table of the database and its indexes."""
        tables = []
        for row in self.executor.fetch_all(_TABLES_QUERY, _TABLES_PARAMS):
            table = TableDef.from_row(row)
            table.pk_is_autoincrement(self.executor)
            table.get_foreign_keys(self.executor)
            table.get_column_info(self.executor)
            table.get_constraints(self.executor)
            tables.append(table)
        return Schema(tables=tables, indexes=self.discover_indexes())

    def discover_indexes(self) -> list[IndexInfo]:
        """Discover the indexes made by CREATE INDEX on every table."""
        discovered: list[IndexInfo] = []
        for row in self.executor.fetch_all(_TABLES_QUERY, _TABLES_PARAMS):
            table = TableDef.from_row(row)
            table.get_indexes(self.executor)
            discovered.extend(table.indexes)
        return discovered