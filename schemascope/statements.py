"""SQL statements that recreate a discovered SQLite schema."""

from __future__ import annotations

from dataclasses import dataclass, field

from .types import ColumnType, DefaultKind, DefaultType


def quote_identifier(name: str) -> str:
    """Quote an identifier with double quotes, doubling embedded quotes."""
    return '"' + name.replace('"', '""') + '"'


def render_value(value: object) -> str:
    """Render a Python value as an SQLite literal."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return "'" + value.replace("'", "''") + "'"
    if isinstance(value, (bytes, bytearray)):
        return "x'" + bytes(value).hex().upper() + "'"
    raise TypeError(f"cannot render {type(value).__name__} as an SQL literal")


def _column_list(columns: list[str]) -> str:
    return "(" + ", ".join(quote_identifier(column) for column in columns) + ")"


@dataclass
class IndexCreateStatement:
    """An index, or a unique or primary key constraint of a table."""

    name: str | None = None
    table: str | None = None
    columns: list[str] = field(default_factory=list)
    unique: bool = False
    primary: bool = False

    def to_sql(self) -> str:
        """Render a standalone CREATE INDEX statement."""
        if self.primary:
            raise ValueError("a primary key can only be declared inside CREATE TABLE")
        if self.name is None:
            raise ValueError("a standalone index needs a name")
        if self.table is None:
            raise ValueError("an index needs a table")
        if not self.columns:
            raise ValueError("an index needs at least one column")
        unique = "UNIQUE " if self.unique else ""
        return (
            f"CREATE {unique}INDEX {quote_identifier(self.name)} "
            f"ON {quote_identifier(self.table)} {_column_list(self.columns)}"
        )

    def _constraint_sql(self) -> str:
        if not self.columns:
            raise ValueError("a constraint needs at least one column")
        if self.primary:
            return f"PRIMARY KEY {_column_list(self.columns)}"
        if not self.unique:
            raise ValueError(
                "only unique and primary key constraints fit inside CREATE TABLE"
            )
        prefix = f"CONSTRAINT {quote_identifier(self.name)} " if self.name else ""
        return f"{prefix}UNIQUE {_column_list(self.columns)}"


@dataclass
class ColumnDef:
    """One column of a CREATE TABLE statement."""

    name: str
    column_type: ColumnType
    not_null: bool = False
    primary_key: bool = False
    auto_increment: bool = False
    default: DefaultType | None = None

    def to_sql(self) -> str:
        """Render the column definition."""
        parts = [quote_identifier(self.name)]
        type_sql = self.column_type.to_sql()
        if type_sql:
            parts.append(type_sql)
        if self.not_null:
            parts.append("NOT NULL")
        if self.primary_key:
            parts.append("PRIMARY KEY")
        if self.auto_increment:
            parts.append("AUTOINCREMENT")
        default = self._default_sql()
        if default is not None:
            parts.append(f"DEFAULT {default}")
        return " ".join(parts)

    def _default_sql(self) -> str | None:
        if self.default is None:
            return None
        kind = self.default.kind
        if kind in (DefaultKind.INTEGER, DefaultKind.FLOAT, DefaultKind.STRING):
            return render_value(self.default.value)
        if kind is DefaultKind.CURRENT_TIMESTAMP:
            return "CURRENT_TIMESTAMP"
        return None


@dataclass
class ForeignKeyCreateStatement:
    """A foreign key clause of a CREATE TABLE statement."""

    table: str
    columns: list[str]
    ref_table: str
    ref_columns: list[str | None] = field(default_factory=list)
    on_delete: str | None = None
    on_update: str | None = None

    def to_sql(self) -> str:
        """Render the FOREIGN KEY clause."""
        if not self.columns:
            raise ValueError("a foreign key needs at least one column")
        referenced = [column for column in self.ref_columns if column is not None]
        if referenced and len(referenced) != len(self.columns):
            raise ValueError("foreign key column counts do not match")
        sql = (
            f"FOREIGN KEY {_column_list(self.columns)} "
            f"REFERENCES {quote_identifier(self.ref_table)}"
        )
        if referenced:
            sql += f" {_column_list(referenced)}"
        if self.on_delete:
            sql += f" ON DELETE {self.on_delete}"
        if self.on_update:
            sql += f" ON UPDATE {self.on_update}"
        return sql


@dataclass
class TableCreateStatement:
    """A CREATE TABLE statement."""

    table: str
    columns: list[ColumnDef] = field(default_factory=list)
    indexes: list[IndexCreateStatement] = field(default_factory=list)
    foreign_keys: list[ForeignKeyCreateStatement] = field(default_factory=list)

    def to_sql(self) -> str:
        """Render the whole CREATE TABLE statement."""
        if not self.columns:
            raise ValueError("a table needs at least one column")
        items = [column.to_sql() for column in self.columns]
        items.extend(index._constraint_sql() for index in self.indexes)
        items.extend(foreign_key.to_sql() for foreign_key in self.foreign_keys)
        return f"CREATE TABLE {quote_identifier(self.table)} ( {', '.join(items)} )"