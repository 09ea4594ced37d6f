# src/college_organizer/core/errors.py

from __future__ import annotations


class OrganizerError(Exception):
    """Base class for errors surfaced to callers of the organizer."""


class ValidationError(OrganizerError):
    """
    A payload is malformed or misses a required field.

    `errors` maps field name -> human readable problem.
    """

    def __init__(self, entity: str, errors: dict[str, str]) -> None:
        self.entity = entity
        self.errors = dict(errors)
        detail = "; ".join(f"{k}: {v}" for k, v in sorted(self.errors.items()))
        super().__init__(f"Invalid {entity}: {detail}")


class NotFoundError(OrganizerError):
    def __init__(self, entity: str, record_id: str) -> None:
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity.capitalize()} not found: {record_id}")


class StoreError(OrganizerError):
    """Unexpected failure in the storage backend (fatal to the request only)."""
