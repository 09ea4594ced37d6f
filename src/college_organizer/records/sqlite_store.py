# src/college_organizer/records/sqlite_store.py

from __future__ import annotations

import contextlib
import json
import logging
import sqlite3
import time
import uuid
from pathlib import Path
from typing import Any, Generic, TypeVar

from ..core.errors import StoreError
from .models import utc_now
from .schemas import RecordSchema

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SqliteRecordStore(Generic[T]):
    """
    SQLite store for one entity type.

    Each entity gets its own table holding the wire-format record as JSON:
    - create table if missing
    - `seq` keeps insertion order for entities without an explicit sort

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, schema: RecordSchema[T], db_path: str | Path = "organizer.sqlite3") -> None:
        self._schema = schema
        self._table = "records_" + schema.entity.replace(" ", "_")
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("SqliteRecordStore ready db=%s table=%s", self._db_path, self._table)

    @property
    def entity(self) -> str:
        return self._schema.entity

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        except sqlite3.Error as e:
            raise StoreError(f"cannot open {self._db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {self._table} (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    id TEXT NOT NULL UNIQUE,
                    updated_at REAL NOT NULL,
                    payload TEXT NOT NULL
                )
                """
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"schema setup failed for {self._table}: {e}") from e
        finally:
            conn.close()

    def _row_to_record(self, row: sqlite3.Row) -> T:
        return self._schema.from_dict(json.loads(row["payload"]))

    def _strip_owned(self, fields: dict[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in fields.items() if k not in ("id", self._schema.timestamp_field)}

    # ---- public API ----

    def list(self) -> list[T]:
        conn = self._get_conn()
        try:
            cur = conn.execute(f"SELECT payload FROM {self._table} ORDER BY seq ASC")
            records = [self._row_to_record(r) for r in cur.fetchall()]
        except sqlite3.Error as e:
            raise StoreError(f"list {self._schema.entity} failed: {e}") from e
        finally:
            conn.close()
        return self._schema.ordered(records)

    def get(self, record_id: str) -> T | None:
        conn = self._get_conn()
        try:
            cur = conn.execute(f"SELECT payload FROM {self._table} WHERE id = ?", (record_id,))
            row = cur.fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"get {self._schema.entity} failed: {e}") from e
        finally:
            conn.close()
        return self._row_to_record(row) if row else None

    def create(self, fields: dict[str, Any]) -> T:
        row = self._strip_owned(fields)
        self._schema.validate(row)
        record_id = str(uuid.uuid4())
        row["id"] = record_id
        row[self._schema.timestamp_field] = utc_now().isoformat()
        record = self._schema.from_dict(row)
        payload = json.dumps(record.to_dict(), ensure_ascii=False)  # type: ignore[attr-defined]

        conn = self._get_conn()
        try:
            conn.execute(
                f"INSERT INTO {self._table}(id, updated_at, payload) VALUES (?, ?, ?)",
                (record_id, time.time(), payload),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"create {self._schema.entity} failed: {e}") from e
        finally:
            conn.close()

        logger.debug("Created %s id=%s", self._schema.entity, record_id)
        return record

    def update(self, record_id: str, fields: dict[str, Any]) -> T | None:
        conn = self._get_conn()
        try:
            cur = conn.execute(f"SELECT payload FROM {self._table} WHERE id = ?", (record_id,))
            row = cur.fetchone()
            if row is None:
                return None

            merged = json.loads(row["payload"])
            merged.update(self._strip_owned(fields))
            self._schema.validate(merged)
            record = self._schema.from_dict(merged)

            conn.execute(
                f"UPDATE {self._table} SET payload = ?, updated_at = ? WHERE id = ?",
                (json.dumps(record.to_dict(), ensure_ascii=False), time.time(), record_id),  # type: ignore[attr-defined]
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"update {self._schema.entity} failed: {e}") from e
        finally:
            conn.close()

        logger.debug("Updated %s id=%s fields=%s", self._schema.entity, record_id, sorted(fields))
        return record

    def delete(self, record_id: str) -> bool:
        conn = self._get_conn()
        try:
            cur = conn.execute(f"DELETE FROM {self._table} WHERE id = ?", (record_id,))
            conn.commit()
            existed = cur.rowcount == 1
        except sqlite3.Error as e:
            raise StoreError(f"delete {self._schema.entity} failed: {e}") from e
        finally:
            conn.close()

        if existed:
            logger.debug("Deleted %s id=%s", self._schema.entity, record_id)
        return existed
