"""Generic record store over the household SQLite database."""

from __future__ import annotations

import json
import logging
import sqlite3
import uuid
from pathlib import Path
from typing import Any, Iterable, Mapping

from .schema import ensure_schema

logger = logging.getLogger(__name__)

TABLES: frozenset[str] = frozenset(
    {"children", "events", "homework", "schedules", "shopping_list", "notes"}
)

# Columns stored as JSON text and decoded on read
_JSON_COLUMNS: dict[str, set[str]] = {"schedules": {"subjects"}}

# Columns stored as 0/1 and decoded to bool on read
_BOOL_COLUMNS: dict[str, set[str]] = {
    "homework": {"completed"},
    "shopping_list": {"checked"},
    "notes": {"pinned", "done"},
}


class StoreError(Exception):
    """A record could not be read or written."""


class RecordStore:
    """insert / upsert / query / update / delete over whitelisted tables."""

    def __init__(self, db_path: str | Path = "~/.config/sisatset/sisatset.db") -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None
        self._columns: dict[str, set[str]] = {}

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            try:
                self._conn = ensure_schema(self._db_path)
            except sqlite3.Error as e:
                raise StoreError(f"cannot open {self._db_path}: {e}") from e
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> RecordStore:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def insert(self, table: str, record: Mapping[str, Any]) -> dict:
        """Insert a record and return the stored row.

        An ``id`` is generated when the record has none.
        """
        row = {"id": uuid.uuid4().hex, **record}
        cols = self._check_columns(table, row.keys())
        placeholders = ", ".join("?" for _ in cols)
        sql = f"INSERT INTO {table} ({', '.join(cols)}) VALUES ({placeholders})"
        self._execute(sql, [self._encode(table, c, row[c]) for c in cols])
        return self.get(table, row["id"])

    def upsert(
        self,
        table: str,
        record: Mapping[str, Any],
        conflict_keys: Iterable[str],
    ) -> dict:
        """Insert a record, or update the row sharing its *conflict_keys*.

        The existing row keeps its id when updated.
        """
        keys = list(conflict_keys)
        row = {"id": uuid.uuid4().hex, **record}
        cols = self._check_columns(table, row.keys())
        self._check_columns(table, keys)
        missing = [k for k in keys if k not in row]
        if missing:
            raise StoreError(f"upsert on {table} needs values for {missing}")

        updates = [c for c in cols if c != "id" and c not in keys]
        placeholders = ", ".join("?" for _ in cols)
        if updates:
            action = "DO UPDATE SET " + ", ".join(
                f"{c} = excluded.{c}" for c in updates
            )
        else:
            action = "DO NOTHING"
        sql = (
            f"INSERT INTO {table} ({', '.join(cols)}) VALUES ({placeholders}) "
            f"ON CONFLICT ({', '.join(keys)}) {action}"
        )
        self._execute(sql, [self._encode(table, c, row[c]) for c in cols])

        rows = self.query(table, {k: row[k] for k in keys})
        return rows[0]

    def get(self, table: str, record_id: str) -> dict:
        rows = self.query(table, {"id": record_id})
        if not rows:
            raise StoreError(f"{table} has no row with id {record_id}")
        return rows[0]

    def query(
        self,
        table: str,
        filters: Mapping[str, Any] | None = None,
        *,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict]:
        """Return rows whose columns equal every value in *filters*.

        A list, tuple or set value matches any of its members.
        """
        filters = dict(filters or {})
        self._check_columns(table, filters.keys())
        sql = f"SELECT * FROM {table}"
        params: list[Any] = []
        if filters:
            clauses = []
            for col, value in filters.items():
                if value is None:
                    clauses.append(f"{col} IS NULL")
                elif isinstance(value, (list, tuple, set, frozenset)):
                    values = list(value)
                    clauses.append(f"{col} IN ({', '.join('?' for _ in values)})")
                    params.extend(self._encode(table, col, v) for v in values)
                else:
                    clauses.append(f"{col} = ?")
                    params.append(self._encode(table, col, value))
            sql += " WHERE " + " AND ".join(clauses)
        if order_by:
            self._check_columns(table, [order_by])
            sql += f" ORDER BY {order_by} {'DESC' if descending else 'ASC'}"

        try:
            rows = self._get_conn().execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"query on {table} failed: {e}") from e
        return [self._decode(table, dict(r)) for r in rows]

    def update(self, table: str, record_id: str, patch: Mapping[str, Any]) -> int:
        """Apply *patch* to one row.

        Returns:
            Number of rows updated (0 or 1).
        """
        if not patch:
            return 0
        cols = self._check_columns(table, patch.keys())
        assignments = ", ".join(f"{c} = ?" for c in cols)
        params = [self._encode(table, c, patch[c]) for c in cols]
        if table == "notes":
            assignments += ", updated_at = datetime('now', 'localtime')"
        cur = self._execute(
            f"UPDATE {table} SET {assignments} WHERE id = ?",
            [*params, record_id],
        )
        return cur.rowcount

    def delete(self, table: str, record_id: str) -> int:
        """Delete a row by id and return the number of rows removed."""
        self._check_table(table)
        cur = self._execute(f"DELETE FROM {table} WHERE id = ?", [record_id])
        return cur.rowcount

    def _execute(self, sql: str, params: list[Any]) -> sqlite3.Cursor:
        conn = self._get_conn()
        try:
            cur = conn.execute(sql, params)
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.debug("SQL failed: %s", sql)
            raise StoreError(str(e)) from e
        return cur

    def _check_table(self, table: str) -> None:
        if table not in TABLES:
            raise StoreError(f"Unknown table: {table}")

    def _check_columns(self, table: str, columns: Iterable[str]) -> list[str]:
        self._check_table(table)
        if table not in self._columns:
            try:
                info = self._get_conn().execute(f"PRAGMA table_info({table})")
                names = {r["name"] for r in info.fetchall()}
            except sqlite3.Error as e:
                raise StoreError(f"cannot read columns of {table}: {e}") from e
            self._columns[table] = names
        cols = list(columns)
        unknown = [c for c in cols if c not in self._columns[table]]
        if unknown:
            raise StoreError(f"Unknown column(s) for {table}: {unknown}")
        return cols

    @staticmethod
    def _encode(table: str, column: str, value: Any) -> Any:
        if column in _JSON_COLUMNS.get(table, ()):
            return json.dumps(value, ensure_ascii=False)
        if isinstance(value, bool):
            return int(value)
        return value

    @staticmethod
    def _decode(table: str, row: dict) -> dict:
        for col in _JSON_COLUMNS.get(table, ()):
            if row.get(col):
                try:
                    row[col] = json.loads(row[col])
                except (json.JSONDecodeError, TypeError):
                    pass
        for col in _BOOL_COLUMNS.get(table, ()):
            if col in row:
                row[col] = bool(row[col])
        return row
