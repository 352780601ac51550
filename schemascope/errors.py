"""Errors raised while discovering an SQLite schema."""

from __future__ import annotations


class SqliteDiscoveryError(Exception):
    """Base class of every error raised during schema discovery."""


class ParseIntError(SqliteDiscoveryError, ValueError):
    """A value from the database could not be read as an integer."""

    def __init__(self, message: str = "Parse Integer Error") -> None:
        super().__init__(message)


class ParseFloatError(SqliteDiscoveryError, ValueError):
    """A value from the database could not be read as a float."""

    def __init__(self, message: str = "Parse Float Error") -> None:
        super().__init__(message)


class DatabaseError(SqliteDiscoveryError):
    """The database driver reported an error."""

    def __init__(self, error: BaseException) -> None:
        super().__init__(f"Database Error: {error!r}")
        self.error = error


class NoIndexesFound(SqliteDiscoveryError):
    """Index discovery was asked for a table that has no indexes."""

    def __init__(self, message: str = "No Indexes Found Error") -> None:
        super().__init__(message)