"""Tables discovered from an SQLite database."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from .column import (
    ColumnInfo,
    ForeignKeysInfo,
    IndexedColumns,
    IndexInfo,
    PartialIndexInfo,
)
from .executor import Executor
from .statements import (
    ColumnDef,
    ForeignKeyCreateStatement,
    IndexCreateStatement,
    TableCreateStatement,
)
from .types import DefaultKind

_SQLITE_MASTER = '"sqlite_master"'


def _pragma(name: str, argument: str) -> str:
    escaped = argument.replace("'", "''")
    return f"PRAGMA {name}('{escaped}')"


@dataclass
class TableDef:
    """A table with its columns, keys, indexes and constraints."""

    name: str
    foreign_keys: list[ForeignKeysInfo] = field(default_factory=list)
    indexes: list[IndexInfo] = field(default_factory=list)
    constraints: list[IndexInfo] = field(default_factory=list)
    columns: list[ColumnInfo] = field(default_factory=list)
    auto_increment: bool = False

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> TableDef:
        """Build an empty table definition from a row holding its name."""
        return cls(name=row[0])

    def pk_is_autoincrement(self, executor: Executor) -> TableDef:
        """Mark the table as autoincrementing if its SQL says AUTOINCREMENT."""
        sql = (
            f'SELECT 1 FROM {_SQLITE_MASTER} '
            f'WHERE "type" = ? AND "name" = ? AND "sql" LIKE ?'
        )
        if executor.fetch_all(sql, ("table", self.name, "%AUTOINCREMENT%")):
            self.auto_increment = True
        return self

    def get_constraints(self, executor: Executor) -> None:
        """Collect the UNIQUE constraints, which SQLite implements as indexes."""
        self.constraints.extend(self._indexes_with_origin(executor, "u"))

    def get_indexes(self, executor: Executor) -> None:
        """Collect the indexes made by CREATE INDEX."""
        self.indexes.extend(self._indexes_with_origin(executor, "c"))

    def _indexes_with_origin(self, executor: Executor, origin: str) -> list[IndexInfo]:
        rows = executor.fetch_all_raw(_pragma("index_list", self.name))
        partials = [
            info
            for info in map(PartialIndexInfo.from_row, rows)
            if info.origin == origin
        ]
        found = []
        for partial in partials:
            indexed = self.get_single_indexinfo(executor, partial.name)
            found.append(
                IndexInfo(
                    index_type=indexed.index_type,
                    index_name=indexed.name,
                    table_name=indexed.table,
                    unique=partial.unique,
                    origin=partial.origin,
                    partial=partial.partial,
                    columns=indexed.indexed_columns,
                )
            )
        return found

    def get_foreign_keys(self, executor: Executor) -> TableDef:
        """Collect the foreign keys, merging the rows of composite keys."""
        last_id = None
        for row in executor.fetch_all_raw(_pragma("foreign_key_list", self.name)):
            info = ForeignKeysInfo.from_row(row)
            if info.id == last_id and self.foreign_keys:
                last = self.foreign_keys[-1]
                last.from_columns.extend(info.from_columns)
                last.to_columns.extend(info.to_columns)
            else:
                self.foreign_keys.append(info)
            last_id = info.id
        return self

    def get_column_info(self, executor: Executor) -> TableDef:
        """Collect every column of the table."""
        rows = executor.fetch_all_raw(_pragma("table_info", self.name))
        self.columns.extend(ColumnInfo.from_row(row) for row in rows)
        return self

    def get_single_indexinfo(self, executor: Executor, index_name: str) -> IndexedColumns:
        """Read an index's ``sqlite_master`` entry and the columns it covers."""
        entry = executor.fetch_one(
            f'SELECT * FROM {_SQLITE_MASTER} WHERE "name" = ?', (index_name,)
        )
        column_rows = executor.fetch_all_raw(_pragma("index_info", index_name))
        return IndexedColumns.from_rows(entry, column_rows)

    def write(self) -> TableCreateStatement:
        """Build the CREATE TABLE statement that recreates this table."""
        statement = TableCreateStatement(table=self.name)
        primary_keys: list[str] = []

        for column in self.columns:
            inline_key = self.auto_increment and column.primary_key
            if column.primary_key and not inline_key:
                primary_keys.append(column.name)
            default = column.default_value
            if default.kind in (DefaultKind.NULL, DefaultKind.UNSPECIFIED):
                default = None
            statement.columns.append(
                ColumnDef(
                    name=column.name,
                    column_type=column.column_type,
                    not_null=column.not_null,
                    primary_key=inline_key,
                    auto_increment=inline_key,
                    default=default,
                )
            )

        statement.foreign_keys.extend(
            ForeignKeyCreateStatement(
                table=self.name,
                columns=list(foreign_key.from_columns),
                ref_table=foreign_key.table,
                ref_columns=list(foreign_key.to_columns),
                on_delete=foreign_key.on_delete.to_sql(),
                on_update=foreign_key.on_update.to_sql(),
            )
            for foreign_key in self.foreign_keys
        )

        statement.indexes.extend(index.write() for index in self.constraints)

        if primary_keys:
            statement.indexes.append(
                IndexCreateStatement(columns=primary_keys, primary=True)
            )

        return statement