"""Discover SQLite schemas and write them back as SQL statements."""

__version__ = "0.16.2"

__all__ = [
    "column",
    "discovery",
    "errors",
    "executor",
    "schema",
    "statements",
    "table",
    "types",
]