# src/college_organizer/records/memory_store.py

from __future__ import annotations

import logging
import threading
import uuid
from typing import Any, Generic, TypeVar

from .models import utc_now
from .schemas import RecordSchema

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MemoryRecordStore(Generic[T]):
    """
    Volatile in-process store for one entity type.

    Records are kept as normalized wire-format dicts keyed by id; each call
    returns freshly built record objects, so callers cannot mutate stored
    state by accident. A lock makes every call atomic.
    """

    def __init__(self, schema: RecordSchema[T]) -> None:
        self._schema = schema
        self._rows: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    @property
    def entity(self) -> str:
        return self._schema.entity

    def close(self) -> None:
        """Compatibility hook for shutdown (nothing to release)."""
        return

    def _strip_owned(self, fields: dict[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in fields.items() if k not in ("id", self._schema.timestamp_field)}

    def list(self) -> list[T]:
        with self._lock:
            rows = list(self._rows.values())
        return self._schema.ordered([self._schema.from_dict(r) for r in rows])

    def get(self, record_id: str) -> T | None:
        with self._lock:
            row = self._rows.get(record_id)
        return self._schema.from_dict(row) if row is not None else None

    def create(self, fields: dict[str, Any]) -> T:
        row = self._strip_owned(fields)
        self._schema.validate(row)
        record_id = str(uuid.uuid4())
        row["id"] = record_id
        row[self._schema.timestamp_field] = utc_now().isoformat()
        record = self._schema.from_dict(row)

        with self._lock:
            self._rows[record_id] = record.to_dict()  # type: ignore[attr-defined]
        logger.debug("Created %s id=%s", self._schema.entity, record_id)
        return record

    def update(self, record_id: str, fields: dict[str, Any]) -> T | None:
        with self._lock:
            current = self._rows.get(record_id)
            if current is None:
                return None
            merged = dict(current)
            merged.update(self._strip_owned(fields))
            self._schema.validate(merged)
            record = self._schema.from_dict(merged)
            self._rows[record_id] = record.to_dict()  # type: ignore[attr-defined]
        logger.debug("Updated %s id=%s fields=%s", self._schema.entity, record_id, sorted(fields))
        return record

    def delete(self, record_id: str) -> bool:
        with self._lock:
            existed = self._rows.pop(record_id, None) is not None
        if existed:
            logger.debug("Deleted %s id=%s", self._schema.entity, record_id)
        return existed
