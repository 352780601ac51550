"""Column types and default values as reported by SQLite."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

_U32_MAX = 2**32 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")


class ColumnKind(enum.Enum):
    """The kinds of column type that discovery distinguishes."""

    CHAR = "char"
    STRING = "string"
    TEXT = "text"
    TINY_INTEGER = "tiny_integer"
    SMALL_INTEGER = "small_integer"
    INTEGER = "integer"
    BIG_INTEGER = "big_integer"
    FLOAT = "float"
    DOUBLE = "double"
    DECIMAL = "decimal"
    DATE_TIME = "date_time"
    TIMESTAMP = "timestamp"
    TIMESTAMP_WITH_TIME_ZONE = "timestamp_with_time_zone"
    TIME = "time"
    DATE = "date"
    BINARY = "binary"
    VAR_BINARY = "var_binary"
    BLOB = "blob"
    BOOLEAN = "boolean"
    MONEY = "money"
    JSON = "json"
    JSON_BINARY = "json_binary"
    UUID = "uuid"
    CUSTOM = "custom"


_FIXED_SQL = {
    ColumnKind.TEXT: "text",
    ColumnKind.TINY_INTEGER: "tinyint",
    ColumnKind.SMALL_INTEGER: "smallint",
    ColumnKind.INTEGER: "integer",
    ColumnKind.BIG_INTEGER: "bigint",
    ColumnKind.FLOAT: "float",
    ColumnKind.DOUBLE: "double",
    ColumnKind.DATE_TIME: "datetime_text",
    ColumnKind.TIMESTAMP: "timestamp_text",
    ColumnKind.TIMESTAMP_WITH_TIME_ZONE: "timestamp_with_timezone_text",
    ColumnKind.TIME: "time_text",
    ColumnKind.DATE: "date_text",
    ColumnKind.BLOB: "blob",
    ColumnKind.BOOLEAN: "boolean",
    ColumnKind.JSON: "json_text",
    ColumnKind.JSON_BINARY: "jsonb_text",
    ColumnKind.UUID: "uuid_text",
}

_SIMPLE_NAMES = {
    "text": ColumnKind.TEXT,
    "tinyint": ColumnKind.TINY_INTEGER,
    "smallint": ColumnKind.SMALL_INTEGER,
    "int": ColumnKind.INTEGER,
    "integer": ColumnKind.INTEGER,
    "bigint": ColumnKind.BIG_INTEGER,
    "float": ColumnKind.FLOAT,
    "double": ColumnKind.DOUBLE,
    "datetime_text": ColumnKind.DATE_TIME,
    "timestamp": ColumnKind.TIMESTAMP,
    "timestamp_text": ColumnKind.TIMESTAMP,
    "timestamp_with_timezone_text": ColumnKind.TIMESTAMP_WITH_TIME_ZONE,
    "time_text": ColumnKind.TIME,
    "date_text": ColumnKind.DATE,
    "boolean": ColumnKind.BOOLEAN,
    "json_text": ColumnKind.JSON,
    "jsonb_text": ColumnKind.JSON_BINARY,
    "uuid_text": ColumnKind.UUID,
}


@dataclass(frozen=True)
class ColumnType:
    """A column type with its optional length, precision and scale."""

    kind: ColumnKind
    length: int | None = None
    precision: int | None = None
    scale: int | None = None
    name: str | None = None

    def to_sql(self) -> str:
        """Render the type as it is written in an SQLite column definition."""
        fixed = _FIXED_SQL.get(self.kind)
        if fixed is not None:
            return fixed
        if self.kind is ColumnKind.CUSTOM:
            return self.name or ""
        if self.kind is ColumnKind.CHAR:
            return _with_length("char", self.length)
        if self.kind is ColumnKind.STRING:
            return _with_length("varchar", self.length)
        if self.kind is ColumnKind.BINARY:
            return _with_length("blob", self.length)
        if self.kind is ColumnKind.VAR_BINARY:
            return _with_length("varbinary_blob", self.length)
        if self.kind is ColumnKind.DECIMAL:
            return _with_precision("real", self.precision, self.scale)
        if self.kind is ColumnKind.MONEY:
            return _with_precision("real_money", self.precision, self.scale)
        raise ValueError(f"cannot render column kind {self.kind}")


def _with_length(base: str, length: int | None) -> str:
    return base if length is None else f"{base}({length})"


def _with_precision(base: str, precision: int | None, scale: int | None) -> str:
    if precision is None or scale is None:
        return base
    return f"{base}({precision}, {scale})"


def _parse_u32(text: str) -> int | None:
    text = text.strip()
    if not _UNSIGNED.fullmatch(text):
        return None
    number = int(text)
    return number if number <= _U32_MAX else None


def parse_type(data_type: str) -> ColumnType:
    """Map a declared SQLite column type onto a ColumnType."""
    type_name = data_type
    parts: list[int] = []
    prefix, paren, suffix = data_type.partition("(")
    if paren and suffix.endswith(")"):
        type_name = prefix
        for piece in suffix[:-1].split(","):
            number = _parse_u32(piece)
            if number is None:
                break
            parts.append(number)

    name = type_name.lower()
    first = parts[0] if parts else None
    precision, scale = (parts[0], parts[1]) if len(parts) == 2 else (None, None)

    simple = _SIMPLE_NAMES.get(name)
    if simple is not None:
        return ColumnType(simple)
    if name == "char":
        return ColumnType(ColumnKind.CHAR, length=first)
    if name == "varchar":
        return ColumnType(ColumnKind.STRING, length=first)
    if name in ("decimal", "real"):
        return ColumnType(ColumnKind.DECIMAL, precision=precision, scale=scale)
    if name == "blob":
        if len(parts) == 1:
            return ColumnType(ColumnKind.BINARY, length=first)
        return ColumnType(ColumnKind.BLOB)
    if name == "varbinary_blob" and len(parts) == 1:
        return ColumnType(ColumnKind.VAR_BINARY, length=first)
    if name == "real_money":
        return ColumnType(ColumnKind.MONEY, precision=precision, scale=scale)
    return ColumnType(ColumnKind.CUSTOM, name=data_type)


class DefaultKind(enum.Enum):
    """The kinds of value an SQLite ``dflt_value`` can hold."""

    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    NULL = "null"
    UNSPECIFIED = "unspecified"
    CURRENT_TIMESTAMP = "current_timestamp"


@dataclass(frozen=True)
class DefaultType:
    """A column default: its kind and, for literals, its value."""

    kind: DefaultKind
    value: int | float | str | None = None