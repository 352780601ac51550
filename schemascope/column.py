"""Column, index and foreign key records read from SQLite pragmas."""

from __future__ import annotations

import enum
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from .statements import IndexCreateStatement
from .types import ColumnType, DefaultKind, DefaultType, parse_type

_I32 = re.compile(r"[+-]?[0-9]+")
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_FLOAT_WORDS = {"inf", "+inf", "-inf", "infinity", "+infinity", "-infinity",
                "nan", "+nan", "-nan"}
_FLOAT = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


def _parse_int(text: str) -> int | None:
    if not _I32.fullmatch(text):
        return None
    number = int(text)
    return number if _I32_MIN <= number <= _I32_MAX else None


def _parse_float(text: str) -> float | None:
    if _FLOAT.fullmatch(text) or text.lower() in _FLOAT_WORDS:
        return float(text)
    return None


def parse_default(value: str | None) -> DefaultType:
    """Interpret an SQLite ``dflt_value`` as a DefaultType."""
    if value == "NULL":
        return DefaultType(DefaultKind.NULL)
    if not value:
        return DefaultType(DefaultKind.UNSPECIFIED)
    text = value.replace("'", "")
    integer = _parse_int(text)
    if integer is not None:
        return DefaultType(DefaultKind.INTEGER, integer)
    number = _parse_float(text)
    if number is not None:
        return DefaultType(DefaultKind.FLOAT, number)
    if text == "CURRENT_TIMESTAMP":
        return DefaultType(DefaultKind.CURRENT_TIMESTAMP)
    return DefaultType(DefaultKind.STRING, text)


@dataclass
class ColumnInfo:
    """A column as reported by ``PRAGMA table_info``."""

    cid: int
    name: str
    column_type: ColumnType
    not_null: bool
    default_value: DefaultType
    primary_key: bool

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> ColumnInfo:
        """Build from a ``PRAGMA table_info`` row."""
        return cls(
            cid=row[0],
            name=row[1],
            column_type=parse_type(row[2] or ""),
            not_null=row[3] != 0,
            default_value=parse_default(row[4]),
            primary_key=row[5] != 0,
        )


@dataclass
class IndexInfo:
    """An index and the columns it covers."""

    index_type: str = ""
    index_name: str = ""
    table_name: str = ""
    unique: bool = False
    origin: str = ""
    partial: int = 0
    columns: list[str] = field(default_factory=list)

    def write(self) -> IndexCreateStatement:
        """Build the statement that recreates this index."""
        # Only indexes made by CREATE INDEX keep a meaningful name; others are autogenerated.
        return IndexCreateStatement(
            name=self.index_name if self.origin == "c" else None,
            table=self.table_name,
            columns=list(self.columns),
            unique=self.unique,
        )


@dataclass
class PartialIndexInfo:
    """An index as reported by ``PRAGMA index_list``."""

    seq: int = 0
    name: str = ""
    unique: bool = False
    origin: str = ""
    partial: int = 0

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> PartialIndexInfo:
        """Build from a ``PRAGMA index_list`` row."""
        return cls(
            seq=row[0],
            name=row[1],
            unique=row[2] != 0,
            origin=row[3],
            partial=row[4],
        )


@dataclass
class IndexedColumns:
    """An index's ``sqlite_master`` entry with the columns it covers."""

    index_type: str = ""
    name: str = ""
    table: str = ""
    root_page: int = 0
    indexed_columns: list[str] = field(default_factory=list)

    @classmethod
    def from_rows(
        cls, row: Sequence[Any], rows: Sequence[Sequence[Any]]
    ) -> IndexedColumns:
        """Build from a ``sqlite_master`` row and ``PRAGMA index_info`` rows."""
        return cls(
            index_type=row[0],
            name=row[1],
            table=row[2],
            root_page=row[3],
            indexed_columns=[column_row[2] for column_row in rows],
        )


class ForeignKeyAction(enum.Enum):
    """An ON UPDATE or ON DELETE action of a foreign key."""

    NO_ACTION = "NO ACTION"
    RESTRICT = "RESTRICT"
    SET_NULL = "SET NULL"
    SET_DEFAULT = "SET DEFAULT"
    CASCADE = "CASCADE"

    @classmethod
    def parse(cls, action: str) -> ForeignKeyAction:
        """Read an action name; unknown names mean NO ACTION."""
        try:
            return cls(action)
        except ValueError:
            return cls.NO_ACTION

    def to_sql(self) -> str:
        """The action as written in SQL."""
        return self.value


class MatchAction(enum.Enum):
    """The MATCH clause of a foreign key."""

    SIMPLE = "MATCH SIMPLE"
    PARTIAL = "MATCH PARTIAL"
    FULL = "MATCH FULL"
    NONE = "MATCH NONE"

    @classmethod
    def parse(cls, action: str) -> MatchAction:
        """Read a MATCH clause; unknown text means NONE."""
        try:
            return cls(action)
        except ValueError:
            return cls.NONE


@dataclass
class ForeignKeysInfo:
    """A foreign key as reported by ``PRAGMA foreign_key_list``."""

    id: int = 0
    seq: int = 0
    table: str = ""
    from_columns: list[str] = field(default_factory=list)
    to_columns: list[str | None] = field(default_factory=list)
    on_update: ForeignKeyAction = ForeignKeyAction.NO_ACTION
    on_delete: ForeignKeyAction = ForeignKeyAction.NO_ACTION
    match: MatchAction = MatchAction.NONE

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> ForeignKeysInfo:
        """Build from a single ``PRAGMA foreign_key_list`` row."""
        return cls(
            id=row[0],
            seq=row[1],
            table=row[2],
            from_columns=[row[3]],
            to_columns=[row[4]],
            on_update=ForeignKeyAction.parse(row[5]),
            on_delete=ForeignKeyAction.parse(row[6]),
            match=MatchAction.parse(row[7]),
        )