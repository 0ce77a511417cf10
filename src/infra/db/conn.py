# filepath: src/infra/db/conn.py
from __future__ import annotations

import os
import sqlite3
from pathlib import Path
from urllib.parse import parse_qs, urlsplit

from app.logging_config import get_logger
from app.settings import StoreSettings
from core.errors import StoreUnavailable

MEMORY_TARGET = ":memory:"

logger = get_logger(__name__)


def is_uri_target(target: str | os.PathLike) -> bool:
    return str(target).startswith("file:")


def is_memory_target(target: str | os.PathLike) -> bool:
    text = str(target)
    if text == MEMORY_TARGET:
        return True
    if not is_uri_target(text):
        return False
    parts = urlsplit(text)
    return parts.path == MEMORY_TARGET or "memory" in parse_qs(parts.query).get("mode", [])


def _prepare_path(path: Path, settings: StoreSettings) -> None:
    if path.is_dir():
        raise StoreUnavailable("target is a directory", target=str(path))

    parent = path.parent
    if not parent.exists():
        if not settings.create_dirs:
            raise StoreUnavailable("parent directory does not exist", target=str(path))
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreUnavailable(
                f"cannot create parent directory: {exc}", target=str(path)
            ) from exc

    if path.exists() and not os.access(path, os.R_OK | os.W_OK):
        raise StoreUnavailable("store file is not readable and writable", target=str(path))


def open_connection(
    target: str | os.PathLike, settings: StoreSettings
) -> sqlite3.Connection:
    """
    Open (or create) the SQLite store at ``target`` and apply connection defaults.

    The connection runs with ``isolation_level=None`` so transaction
    boundaries are issued explicitly by the owning scope. Any failure to open,
    read or configure the file is reported as StoreUnavailable.

    ``file:`` URIs are handed to SQLite as-is; only plain paths get the
    directory and permission checks.
    """
    memory = is_memory_target(target)
    uri = is_uri_target(target)
    if memory or uri:
        db = str(target)
    else:
        path = Path(target).expanduser()
        _prepare_path(path, settings)
        db = str(path)

    try:
        conn = sqlite3.connect(
            db,
            timeout=settings.timeout,
            isolation_level=None,
            uri=uri,
        )
    except sqlite3.Error as exc:
        raise StoreUnavailable(f"cannot open store: {exc}", target=db) from exc

    try:
        # Reading the header fails fast on files that are not SQLite databases
        conn.execute("PRAGMA schema_version").fetchone()
        if not memory:
            conn.execute(f"PRAGMA journal_mode={settings.journal_mode}").fetchone()
        conn.execute(f"PRAGMA busy_timeout={int(settings.timeout * 1000)}")
        conn.execute(f"PRAGMA foreign_keys={'ON' if settings.foreign_keys else 'OFF'}")
    except sqlite3.Error as exc:
        conn.close()
        raise StoreUnavailable(f"store is unusable: {exc}", target=db) from exc

    logger.debug("Opened store %s", db)
    return conn
