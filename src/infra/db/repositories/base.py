from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from infra.db.session import ScopeHandle


class BaseRepo:
    def __init__(self, db: ScopeHandle):
        self.db = db

    def _one(self, sql: str, params: Sequence[Any] | None = None) -> dict | None:
        rows = self.db.query_mappings(sql, params or [])
        return rows[0] if rows else None

    def _all(self, sql: str, params: Sequence[Any] | None = None) -> list[dict]:
        return self.db.query_mappings(sql, params or [])

    def _iter(self, sql: str, params: Sequence[Any] | None = None) -> Iterable[dict]:
        yield from self._all(sql, params)
