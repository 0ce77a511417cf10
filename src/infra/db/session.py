"""
Scoped, transactional access to an embedded SQLite store.

A scope opens one connection, runs the caller's statements inside a single
transaction, and on exit finalizes (commit or rollback) and then releases the
connection. Release happens on every exit path.

    with acquire("bot.db", settings) as db:
        db.execute("INSERT INTO people(name, age) VALUES (?, ?)", ("Alice", 30))
"""

from __future__ import annotations

import os
import sqlite3
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from app.logging_config import get_logger
from app.settings import StoreSettings
from core.errors import CommitFailed, OperationFailed, StoreUnavailable
from infra.db.conn import open_connection

logger = get_logger(__name__)

Connector = Callable[[str | os.PathLike, StoreSettings], sqlite3.Connection]


_INSERT_VERBS = ("INSERT", "REPLACE")


def _inserted_rowid(sql: str, cur: sqlite3.Cursor) -> int | None:
    """Rowid of the single row an INSERT added, or None if it added no single row."""
    # lastrowid keeps the previous value after UPDATE or an ignored INSERT
    words = sql.split(None, 1)
    if not words or words[0].upper() not in _INSERT_VERBS:
        return None
    if cur.rowcount != 1 or cur.lastrowid is None:
        return None
    return int(cur.lastrowid)


def _split_script(script: str) -> list[str]:
    """Split a SQL script into complete statements without executing it."""
    statements: list[str] = []
    buffer = ""
    for piece in script.split(";"):
        buffer += piece + ";"
        if sqlite3.complete_statement(buffer):
            statement = buffer.strip()
            if statement.rstrip(";").strip():
                statements.append(statement)
            buffer = ""
    if buffer.rstrip(";").strip():
        statements.append(buffer.strip())
    return statements


class ScopeHandle:
    """
    The connection owned by one scope. Statements are not individually
    transactional; the surrounding scope is the transaction unit.
    """

    def __init__(self, conn: sqlite3.Connection, target: str) -> None:
        self._conn: sqlite3.Connection | None = conn
        self.target = target

    @property
    def closed(self) -> bool:
        return self._conn is None

    @property
    def connection(self) -> sqlite3.Connection:
        return self._live()

    def _live(self) -> sqlite3.Connection:
        if self._conn is None:
            raise OperationFailed("scope is closed", target=self.target)
        return self._conn

    def _fail(self, exc: sqlite3.Error, sql: str) -> OperationFailed:
        return OperationFailed(str(exc), target=self.target, sql=sql)

    def execute(self, sql: str, params: Sequence[Any] | dict = ()) -> sqlite3.Cursor:
        conn = self._live()
        try:
            return conn.execute(sql, params)
        except sqlite3.Error as exc:
            raise self._fail(exc, sql) from exc

    def executemany(self, sql: str, seq_of_params: Iterable[Sequence[Any]]) -> sqlite3.Cursor:
        conn = self._live()
        try:
            return conn.executemany(sql, seq_of_params)
        except sqlite3.Error as exc:
            raise self._fail(exc, sql) from exc

    def executescript(self, script: str) -> None:
        # sqlite3's own executescript() commits any pending transaction first,
        # which would break the scope boundary; run statement by statement.
        for statement in _split_script(script):
            self.execute(statement)

    def insert(self, sql: str, params: Sequence[Any] | dict = ()) -> int:
        """Run a single-row INSERT and return the assigned rowid."""
        rowid = _inserted_rowid(sql, self.execute(sql, params))
        if rowid is None:
            raise OperationFailed(
                "statement did not insert exactly one row", target=self.target, sql=sql
            )
        return rowid

    def query(self, sql: str, params: Sequence[Any] | dict = ()) -> list[tuple]:
        cur = self.execute(sql, params)
        try:
            return [tuple(row) for row in cur.fetchall()]
        except sqlite3.Error as exc:
            raise self._fail(exc, sql) from exc

    def query_one(self, sql: str, params: Sequence[Any] | dict = ()) -> tuple | None:
        cur = self.execute(sql, params)
        try:
            row = cur.fetchone()
        except sqlite3.Error as exc:
            raise self._fail(exc, sql) from exc
        return tuple(row) if row is not None else None

    def query_mappings(self, sql: str, params: Sequence[Any] | dict = ()) -> list[dict]:
        cur = self.execute(sql, params)
        try:
            rows = cur.fetchall()
        except sqlite3.Error as exc:
            raise self._fail(exc, sql) from exc
        columns = [col[0] for col in cur.description or ()]
        return [dict(zip(columns, row)) for row in rows]

    def _detach(self) -> sqlite3.Connection | None:
        conn, self._conn = self._conn, None
        return conn


class ScopedConnection:
    """
    One transactional scope over the store at ``target``.

    Use as a context manager, or drive it explicitly with ``open()``,
    ``finalize()`` and ``release()`` when a ``with`` block doesn't fit.
    A scope is single-use.
    """

    def __init__(
        self,
        target: str | os.PathLike,
        settings: StoreSettings,
        *,
        connect: Connector = open_connection,
    ) -> None:
        self.target = str(target)
        self.settings = settings
        self._connect = connect
        self._handle: ScopeHandle | None = None
        self._entered = False
        self._finalized = False

    @property
    def handle(self) -> ScopeHandle | None:
        return self._handle

    @property
    def released(self) -> bool:
        return self._entered and (self._handle is None or self._handle.closed)

    def open(self) -> ScopeHandle:
        if self._entered:
            raise RuntimeError("ScopedConnection is single-use; acquire a new scope")
        self._entered = True

        conn = self._connect(self.target, self.settings)
        try:
            conn.execute(f"BEGIN {self.settings.begin_mode}")
        except sqlite3.Error as exc:
            conn.close()
            raise StoreUnavailable(f"cannot begin transaction: {exc}", target=self.target) from exc

        self._handle = ScopeHandle(conn, self.target)
        logger.debug("Acquired scope on %s", self.target)
        return self._handle

    def finalize(self, *, failed: bool = False) -> str:
        """
        Commit or roll back the scope's transaction.

        Commits after a clean body; after a failing body the settings'
        finalize policy decides. Returns ``"committed"``, ``"rolled_back"`` or
        ``"skipped"`` (nothing to finalize). Raises CommitFailed when the
        commit cannot be persisted.
        """
        if self._finalized or self._handle is None or self._handle.closed:
            return "skipped"
        self._finalized = True
        conn = self._handle.connection

        if failed and not self.settings.finalize_policy.commits_on_error():
            self._rollback(conn)
            return "rolled_back"

        try:
            conn.commit()
        except sqlite3.Error as exc:
            self._rollback(conn)
            raise CommitFailed(f"commit failed: {exc}", target=self.target) from exc
        logger.debug("Committed scope on %s", self.target)
        return "committed"

    def _rollback(self, conn: sqlite3.Connection) -> None:
        try:
            conn.rollback()
        except sqlite3.Error as exc:
            logger.warning("Rollback failed on %s: %s", self.target, exc)
        else:
            logger.debug("Rolled back scope on %s", self.target)

    def release(self) -> None:
        """Close the underlying connection. Calling it again is a no-op."""
        if self._handle is None:
            return
        conn = self._handle._detach()
        if conn is None:
            return
        try:
            conn.close()
        except sqlite3.Error as exc:
            logger.warning("Closing %s reported an error: %s", self.target, exc)
        logger.debug("Released scope on %s", self.target)

    def __enter__(self) -> ScopeHandle:
        if self._handle is not None and not self._handle.closed:
            return self._handle
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> bool:
        failed = exc_type is not None
        try:
            self.finalize(failed=failed)
        except CommitFailed as commit_exc:
            if not failed:
                raise
            logger.error(
                "Commit after failed body also failed on %s: %s", self.target, commit_exc
            )
        finally:
            self.release()

        if isinstance(exc, sqlite3.Error):
            raise OperationFailed(str(exc), target=self.target) from exc
        return False


def acquire(
    target_path: str | os.PathLike,
    settings: StoreSettings,
    *,
    connect: Connector = open_connection,
) -> ScopedConnection:
    """
    Open the store at ``target_path`` and return its scope, ready to be used
    with ``with``. Raises StoreUnavailable when the store cannot be opened.
    """
    scope = ScopedConnection(target_path, settings, connect=connect)
    scope.open()
    return scope


class Store:
    """
    An explicitly passed handle on one store file. Holds the target path
    (None means ``settings.db_path``) and settings; every ``scope()`` call opens a fresh, independent connection.
    """

    def __init__(
        self,
        target: str | os.PathLike | None,
        settings: StoreSettings,
        *,
        connect: Connector = open_connection,
    ) -> None:
        self.settings = settings
        self.target = str(target if target is not None else self.settings.db_path)
        self._connect = connect

    def scope(self) -> ScopedConnection:
        return acquire(self.target, self.settings, connect=self._connect)

    def ensure_schema(self, script: str) -> None:
        with self.scope() as db:
            db.executescript(script)

    def __repr__(self) -> str:
        return f"Store(target={self.target!r}, policy={self.settings.finalize_policy.value})"
