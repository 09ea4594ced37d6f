# src/college_organizer/core/ports.py

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the record store and the notification presentation swappable
and makes testing easier.
"""

from __future__ import annotations

from typing import Any, Awaitable, Protocol, TypeVar

T = TypeVar("T")


class RecordRepo(Protocol[T]):
    """
    CRUD contract, one instance per entity type.

    `create`/`update` take wire-format (camelCase) fields; the store assigns
    ids and timestamps. Missing ids are reported as None/False, not raised.
    """

    def list(self) -> list[T]: ...
    def get(self, record_id: str) -> T | None: ...
    def create(self, fields: dict[str, Any]) -> T: ...
    def update(self, record_id: str, fields: dict[str, Any]) -> T | None: ...
    def delete(self, record_id: str) -> bool: ...


class NotificationSink(Protocol):
    """
    Presentation-side port: where the notification monitor sends events.

    The sink decides how a notification is shown (console line, toast, ...).
    """

    def show(self, notification: Any) -> Awaitable[None]: ...
    def hide(self, notification: Any) -> Awaitable[None]: ...
