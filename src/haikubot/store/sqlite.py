"""SQLite-backed haiku store."""

from __future__ import annotations

import json
import sqlite3
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from haikubot.store.models import HaikuRecord, StoreError

_SCHEMA = """
CREATE TABLE IF NOT EXISTS haikus (
    server_id INTEGER NOT NULL,
    id INTEGER NOT NULL,
    content TEXT NOT NULL,
    authors TEXT NOT NULL DEFAULT '[]',
    PRIMARY KEY (server_id, id)
)
"""
_COLUMNS = "server_id, id, content, authors"
_SELECT_BY_SERVER = f"SELECT {_COLUMNS} FROM haikus WHERE server_id = ?"  # nosec B608


def _escape_like(keyword: str) -> str:
    return keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqliteHaikuStore:
    """Haiku store persisted in one SQLite file."""

    def __init__(self, path: Path) -> None:
        """Open store and ensure schema exists.

        Args:
            path: SQLite database file path.

        Raises:
            StoreError: If the database cannot be initialized.
        """
        self._path = path
        path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.execute(_SCHEMA)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = sqlite3.connect(self._path)
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot open haiku database {self._path}: {exc}") from exc
        try:
            with conn:
                yield conn
        except sqlite3.Error as exc:
            raise StoreError(f"Haiku database error: {exc}") from exc
        finally:
            conn.close()

    def add_haiku(
        self, server_id: int, content: str, *, authors: Sequence[str] = ()
    ) -> HaikuRecord:
        """Store one haiku under the next server-scoped id.

        Args:
            server_id: Owning server.
            content: Haiku text.
            authors: Display names of contributing authors.

        Returns:
            Stored record.
        """
        with self._connect() as conn:
            row = conn.execute(
                "SELECT COALESCE(MAX(id), 0) + 1 FROM haikus WHERE server_id = ?",
                (server_id,),
            ).fetchone()
            record = HaikuRecord(
                server_id=server_id,
                id=int(row[0]),
                content=content,
                authors=tuple(authors),
            )
            conn.execute(
                f"INSERT INTO haikus ({_COLUMNS}) VALUES (?, ?, ?, ?)",  # nosec B608
                (
                    record.server_id,
                    record.id,
                    record.content,
                    json.dumps(list(record.authors)),
                ),
            )
        return record

    def get_haiku(self, server_id: int, haiku_id: int) -> HaikuRecord | None:
        with self._connect() as conn:
            row = conn.execute(
                _SELECT_BY_SERVER + " AND id = ?",
                (server_id, haiku_id),
            ).fetchone()
        return None if row is None else _to_record(row)

    def get_random_haiku(self, server_id: int) -> HaikuRecord | None:
        with self._connect() as conn:
            row = conn.execute(
                _SELECT_BY_SERVER + " ORDER BY RANDOM() LIMIT 1",
                (server_id,),
            ).fetchone()
        return None if row is None else _to_record(row)

    def search_haikus(
        self, server_id: int, keywords: Sequence[str]
    ) -> list[HaikuRecord]:
        clauses = "".join(" AND content LIKE ? ESCAPE '\\'" for _ in keywords)
        params = [server_id, *(f"%{_escape_like(word)}%" for word in keywords)]
        with self._connect() as conn:
            rows = conn.execute(
                _SELECT_BY_SERVER + clauses + " ORDER BY id",
                params,
            ).fetchall()
        return [_to_record(row) for row in rows]


def _to_record(row: tuple[object, ...]) -> HaikuRecord:
    server_id, haiku_id, content, authors = row
    return HaikuRecord(
        server_id=int(server_id),  # type: ignore[arg-type]
        id=int(haiku_id),  # type: ignore[arg-type]
        content=str(content),
        authors=tuple(json.loads(str(authors))),
    )
