"""Run discovery queries against an SQLite connection."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeVar

from .errors import DatabaseError

_log = logging.getLogger(__name__)

Row = Sequence[Any]
_T = TypeVar("_T")


class Executor:
    """Runs the queries of schema discovery on one SQLite connection."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self.connection = connection

    def fetch_all(self, sql: str, params: Iterable[Any] = ()) -> list[Row]:
        """Run a parameterised query and return every row."""
        params = tuple(params)
        _log.debug("%s, %r", sql, params)
        return self._run(sql, params, lambda cursor: list(cursor.fetchall()))

    def fetch_one(self, sql: str, params: Iterable[Any] = ()) -> Row:
        """Run a parameterised query and return its first row.

        Raises DatabaseError when the query returns no rows.
        """
        params = tuple(params)
        _log.debug("%s, %r", sql, params)
        row = self._run(sql, params, lambda cursor: cursor.fetchone())
        if row is None:
            raise DatabaseError(LookupError("no rows returned by a query expecting one"))
        return row

    def fetch_all_raw(self, sql: str) -> list[Row]:
        """Run a statement without parameters and return every row."""
        _log.debug("%s", sql)
        return self._run(sql, (), lambda cursor: list(cursor.fetchall()))

    def _run(
        self,
        sql: str,
        params: tuple[Any, ...],
        fetch: Callable[[sqlite3.Cursor], _T],
    ) -> _T:
        try:
            cursor = self.connection.execute(sql, params)
            try:
                return fetch(cursor)
            finally:
                cursor.close()
        except sqlite3.Error as exc:
            raise DatabaseError(exc) from exc