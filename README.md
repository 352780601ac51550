# schemascope

schemascope reads the schema of an SQLite database through a standard
`sqlite3` connection and returns it as plain Python objects. It can also turn
those objects back into `CREATE TABLE` and `CREATE INDEX` statements. The
package uses only the standard library.

## What it discovers

- Tables, except the internal `sqlite_sequence` table.
- Columns, read from `PRAGMA table_info`: name, parsed type, `NOT NULL`, default
  value and primary-key flag.
- Whether the table's SQL contains `AUTOINCREMENT`.
- Foreign keys, read from `PRAGMA foreign_key_list`. Consecutive rows with the
  same id are merged into one entry, so a key that spans several columns comes
  back once, with its `ON UPDATE` and `ON DELETE` actions and its `MATCH`
  clause.
- Indexes created with `CREATE INDEX` (index origin `c`).
- `UNIQUE` constraints (index origin `u`), stored in `TableDef.constraints`.

## Usage

```python
import sqlite3

from schemascope.discovery import SchemaDiscovery

connection = sqlite3.connect("app.db")
discovery = SchemaDiscovery(connection)

schema = discovery.discover()
for table in schema.tables:
    print(table.name, [column.name for column in table.columns])
    print(table.write().to_sql())

for index in schema.indexes:
    print(index.write().to_sql())
```

`SchemaDiscovery.discover()` returns a `Schema` holding `tables` (a list of
`TableDef`) and `indexes` (a list of `IndexInfo`). Use
`SchemaDiscovery.discover_indexes()` when you only need the indexes.

`Schema.merge_indexes_into_table()` appends each unique index to the
`constraints` of the table it belongs to and returns the schema, so that
`TableDef.write()` emits it inside the table as a `UNIQUE (...)` clause.

The individual steps are also available on `TableDef` and take an
`schemascope.executor.Executor` wrapping the connection:
`pk_is_autoincrement`, `get_foreign_keys`, `get_column_info`,
`get_constraints`, `get_indexes` and `get_single_indexinfo`.

## Writing SQL

`TableDef.write()` returns a `TableCreateStatement` and `IndexInfo.write()` an
`IndexCreateStatement` (both in `schemascope.statements`); call `to_sql()` on
either to get the SQL text. In a written table:

- a primary-key column of an autoincrementing table is written inline as
  `PRIMARY KEY AUTOINCREMENT`; other primary-key columns are gathered into a
  single `PRIMARY KEY (...)` clause;
- integer, float and string defaults and `CURRENT_TIMESTAMP` are written as
  `DEFAULT` clauses; `NULL` and absent defaults are left out;
- identifiers are double-quoted (`quote_identifier`) and literals are rendered
  by `render_value`.

An index keeps its name only if it was created with `CREATE INDEX`;
`IndexCreateStatement.to_sql()` raises `ValueError` for an index without a name,
table or columns.

## Types

`schemascope.types.parse_type` maps an SQLite declared type such as
`varchar(255)`, `decimal(10, 2)` or `blob(16)` to a `ColumnType`, whose `kind`
is a `ColumnKind`. It understands the type names that schema writers commonly
emit, for example `datetime_text`, `uuid_text` and `json_text`. Any name it does
not know becomes a `ColumnKind.CUSTOM` type that keeps the original text.
`ColumnType.to_sql()` renders a type back as SQL.

Column defaults are `DefaultType` values with a `DefaultKind`:
`schemascope.column.parse_default` reads an integer, a float,
`CURRENT_TIMESTAMP`, `NULL`, an empty value or any other string.

## Errors

All errors derive from `schemascope.errors.SqliteDiscoveryError`.

- `DatabaseError` is raised when `sqlite3` reports an error, and when a query
  that expects one row returns none. The underlying exception is kept in its
  `error` attribute.
- `ParseIntError`, `ParseFloatError` and `NoIndexesFound` are defined for
  callers to use; discovery itself does not raise them.

Each query the executor runs is logged at `DEBUG` level on the
`schemascope.executor` logger.

## What it does not do

schemascope works with SQLite only and runs synchronously on the connection it
is given. It has no command-line tool. It does not discover views or triggers,
and it does not run the statements it writes; executing them is left to the
caller.

## Running the tests

```
pip install -e ".[test]"
pytest
```