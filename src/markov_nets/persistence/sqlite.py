"""SQLite persistence for sharing distributions across processes."""

from __future__ import annotations

import sqlite3
import threading
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Optional, Sequence

from ..chain import ItemSequence
from ..types import WeightedItem
from .base import (
    DistributionStore,
    PersistenceAdapter,
    decode_context,
    decode_entries,
    encode_context,
    encode_entries,
)


_SCHEMA = """
CREATE TABLE IF NOT EXISTS distributions (
    namespace TEXT NOT NULL,
    context_json TEXT NOT NULL,
    entries_json TEXT NOT NULL,
    PRIMARY KEY (namespace, context_json)
);
"""


class SQLitePersistenceAdapter(PersistenceAdapter):
    def __init__(self, path: str | Path = ":memory:", *, namespace: str = "markov_nets") -> None:
        self._lock = threading.RLock()
        self._path, self._conn_kwargs = self._normalize_path(path)
        # A shared-cache memory database only lives while a connection is open.
        self._anchor: Optional[sqlite3.Connection] = None
        if self._conn_kwargs.get("uri"):
            self._anchor = sqlite3.connect(self._path, **self._conn_kwargs)
        with self._connection() as conn:
            conn.executescript(_SCHEMA)
        self._distributions = SQLiteDistributionStore(self._connection, self._lock, namespace)

    def _normalize_path(self, path: str | Path) -> tuple[str, dict[str, object]]:
        path_str = str(path)
        kwargs: dict[str, object] = {"check_same_thread": False}
        if path_str == ":memory:":
            path_str = f"file:markov_nets_{uuid.uuid4().hex}?mode=memory&cache=shared"
            kwargs["uri"] = True
        return path_str, kwargs

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self._path, **self._conn_kwargs)
        conn.row_factory = sqlite3.Row
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def distributions(self) -> DistributionStore:
        return self._distributions

    def close(self) -> None:
        if self._anchor is not None:
            self._anchor.close()
            self._anchor = None


class SQLiteDistributionStore(DistributionStore):
    def __init__(self, connection_factory, lock: threading.RLock, namespace: str) -> None:
        self._connection_factory = connection_factory
        self._lock = lock
        self._namespace = namespace

    @contextmanager
    def _conn(self):
        with self._lock:
            with self._connection_factory() as conn:
                yield conn

    def get(self, context: ItemSequence) -> Optional[list[WeightedItem]]:
        with self._conn() as conn:
            row = conn.execute(
                "SELECT entries_json FROM distributions WHERE namespace = ? AND context_json = ?",
                (self._namespace, encode_context(context)),
            ).fetchone()
        if row is None:
            return None
        return decode_entries(row["entries_json"])

    def set(self, context: ItemSequence, entries: Sequence[WeightedItem]) -> None:
        with self._conn() as conn:
            conn.execute(
                "REPLACE INTO distributions (namespace, context_json, entries_json) VALUES (?, ?, ?)",
                (self._namespace, encode_context(context), encode_entries(entries)),
            )

    def delete(self, context: ItemSequence) -> None:
        with self._conn() as conn:
            conn.execute(
                "DELETE FROM distributions WHERE namespace = ? AND context_json = ?",
                (self._namespace, encode_context(context)),
            )

    def keys(self) -> Iterable[ItemSequence]:
        with self._conn() as conn:
            rows = conn.execute(
                "SELECT context_json FROM distributions WHERE namespace = ? ORDER BY rowid",
                (self._namespace,),
            ).fetchall()
        return [decode_context(row["context_json"]) for row in rows]


__all__ = ["SQLitePersistenceAdapter", "SQLiteDistributionStore"]
