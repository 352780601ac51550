import sqlite3

import pytest

from schemascope.column import (
    ColumnInfo,
    ForeignKeyAction,
    ForeignKeysInfo,
    IndexedColumns,
    IndexInfo,
    MatchAction,
    PartialIndexInfo,
    parse_default,
)
from schemascope.types import ColumnKind, ColumnType, DefaultKind, DefaultType


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("NULL", DefaultType(DefaultKind.NULL)),
        ("", DefaultType(DefaultKind.UNSPECIFIED)),
        (None, DefaultType(DefaultKind.UNSPECIFIED)),
        ("'5'", DefaultType(DefaultKind.INTEGER, 5)),
        ("-7", DefaultType(DefaultKind.INTEGER, -7)),
        ("1.5", DefaultType(DefaultKind.FLOAT, 1.5)),
        ("CURRENT_TIMESTAMP", DefaultType(DefaultKind.CURRENT_TIMESTAMP)),
        ("'hello'", DefaultType(DefaultKind.STRING, "hello")),
        ("'it''s'", DefaultType(DefaultKind.STRING, "its")),
    ],
)
def test_parse_default(raw, expected):
    assert parse_default(raw) == expected


def test_integer_out_of_i32_range_becomes_float():
    result = parse_default("2147483648")
    assert result.kind is DefaultKind.FLOAT
    assert result.value == 2147483648.0


def test_text_with_spaces_is_string():
    assert parse_default("' 1'") == DefaultType(DefaultKind.STRING, " 1")


@pytest.fixture
def connection():
    conn = sqlite3.connect(":memory:")
    conn.executescript(
        """
        CREATE TABLE parent (id INTEGER PRIMARY KEY AUTOINCREMENT, code varchar(8));
        CREATE TABLE child (
            id integer NOT NULL,
            name text DEFAULT 'anon',
            ratio real DEFAULT 0.5,
            made timestamp_text DEFAULT CURRENT_TIMESTAMP,
            parent_id integer,
            parent_code varchar(8),
            UNIQUE (name, ratio),
            FOREIGN KEY (parent_id, parent_code) REFERENCES parent (id, code)
                ON DELETE CASCADE ON UPDATE SET NULL
        );
        CREATE INDEX idx_child_parent ON child (parent_id);
        """
    )
    yield conn
    conn.close()


def test_column_info_from_pragma(connection):
    rows = connection.execute("PRAGMA table_info('child')").fetchall()
    columns = [ColumnInfo.from_row(row) for row in rows]
    assert [column.name for column in columns] == [
        "id", "name", "ratio", "made", "parent_id", "parent_code",
    ]
    assert columns[0].not_null and not columns[1].not_null
    assert columns[0].column_type == ColumnType(ColumnKind.INTEGER)
    assert columns[1].default_value == DefaultType(DefaultKind.STRING, "anon")
    assert columns[2].default_value == DefaultType(DefaultKind.FLOAT, 0.5)
    assert columns[3].default_value == DefaultType(DefaultKind.CURRENT_TIMESTAMP)
    assert columns[4].default_value == DefaultType(DefaultKind.UNSPECIFIED)
    assert columns[5].column_type == ColumnType(ColumnKind.STRING, length=8)


def test_primary_key_flag(connection):
    rows = connection.execute("PRAGMA table_info('parent')").fetchall()
    columns = [ColumnInfo.from_row(row) for row in rows]
    assert [column.primary_key for column in columns] == [True, False]


def test_index_list_and_info(connection):
    rows = connection.execute("PRAGMA index_list('child')").fetchall()
    partials = {info.name: info for info in map(PartialIndexInfo.from_row, rows)}
    created = partials["idx_child_parent"]
    assert created.origin == "c" and not created.unique
    unique = [info for info in partials.values() if info.origin == "u"]
    assert len(unique) == 1 and unique[0].unique

    master = connection.execute(
        "SELECT * FROM sqlite_master WHERE name = ?", (unique[0].name,)
    ).fetchone()
    index_rows = connection.execute(
        f"PRAGMA index_info('{unique[0].name}')"
    ).fetchall()
    indexed = IndexedColumns.from_rows(master, index_rows)
    assert indexed.index_type == "index"
    assert indexed.table == "child"
    assert indexed.indexed_columns == ["name", "ratio"]


def test_foreign_key_rows(connection):
    rows = connection.execute("PRAGMA foreign_key_list('child')").fetchall()
    keys = [ForeignKeysInfo.from_row(row) for row in rows]
    assert [key.from_columns for key in keys] == [["parent_id"], ["parent_code"]]
    assert [key.to_columns for key in keys] == [["id"], ["code"]]
    assert all(key.table == "parent" for key in keys)
    assert keys[0].on_delete is ForeignKeyAction.CASCADE
    assert keys[0].on_update is ForeignKeyAction.SET_NULL
    assert keys[0].match is MatchAction.NONE


def test_index_write_keeps_name_only_for_created_indexes():
    created = IndexInfo(index_name="idx", table_name="t", unique=True,
                        origin="c", columns=["a", "b"])
    statement = created.write()
    assert statement.name == "idx"
    assert statement.table == "t"
    assert statement.unique
    assert statement.columns == ["a", "b"]

    auto = IndexInfo(index_name="sqlite_autoindex_t_1", table_name="t",
                     unique=True, origin="u", columns=["a"])
    assert auto.write().name is None


@pytest.mark.parametrize(
    "text, action",
    [
        ("NO ACTION", ForeignKeyAction.NO_ACTION),
        ("RESTRICT", ForeignKeyAction.RESTRICT),
        ("SET NULL", ForeignKeyAction.SET_NULL),
        ("SET DEFAULT", ForeignKeyAction.SET_DEFAULT),
        ("CASCADE", ForeignKeyAction.CASCADE),
        ("bogus", ForeignKeyAction.NO_ACTION),
    ],
)
def test_foreign_key_action_parse(text, action):
    assert ForeignKeyAction.parse(text) is action


def test_foreign_key_action_to_sql_round_trip():
    for action in ForeignKeyAction:
        assert ForeignKeyAction.parse(action.to_sql()) is action


@pytest.mark.parametrize(
    "text, action",
    [
        ("MATCH SIMPLE", MatchAction.SIMPLE),
        ("MATCH PARTIAL", MatchAction.PARTIAL),
        ("MATCH FULL", MatchAction.FULL),
        ("MATCH NONE", MatchAction.NONE),
        ("NONE", MatchAction.NONE),
    ],
)
def test_match_action_parse(text, action):
    assert MatchAction.parse(text) is action


def test_foreign_keys_info_defaults():
    info = ForeignKeysInfo()
    assert info.on_update is ForeignKeyAction.NO_ACTION
    assert info.match is MatchAction.NONE
    assert info.from_columns == []