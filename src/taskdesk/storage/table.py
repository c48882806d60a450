"""
Generic in-memory table of pydantic records keyed by an auto-incrementing id.
"""

from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

R = TypeVar("R", bound=BaseModel)

Clock = Callable[[], datetime]

# Assigned by the table, never taken from caller input.
SERVER_FIELDS = frozenset({"id", "created_at", "updated_at"})


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemoryTable(Generic[R]):
    """Map of integer ids to records of one entity kind.

    Ids increase monotonically and are never reused within the lifetime of
    the table, including after deletes. Lookups that find nothing return
    ``None``/``False``/an empty list; they never raise.
    """

    def __init__(self, model: type[R], clock: Clock = utcnow) -> None:
        self._model = model
        self._clock = clock
        self._records: dict[int, R] = {}
        self._next_id = 1

    @property
    def entity(self) -> str:
        return self._model.__name__

    def __len__(self) -> int:
        return len(self._records)

    def _clean(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        return {
            k: v
            for k, v in fields.items()
            if k in self._model.model_fields and k not in SERVER_FIELDS
        }

    def create(self, fields: Mapping[str, Any]) -> R:
        """Insert a record, assigning its id and timestamps.

        Declared model defaults fill any field not present in ``fields``.
        """
        now = self._clock()
        record = self._model.model_validate(
            {
                **self._clean(fields),
                "id": self._next_id,
                "created_at": now,
                "updated_at": now,
            }
        )
        self._next_id += 1
        self._records[record.id] = record  # type: ignore[attr-defined]
        return record

    def get_by_id(self, record_id: int) -> R | None:
        return self._records.get(record_id)

    def find_first(self, field: str, value: Any) -> R | None:
        """Return the first record whose ``field`` equals ``value``."""
        for record in self._records.values():
            if getattr(record, field, None) == value:
                return record
        return None

    def filter_by(self, field: str, value: Any) -> list[R]:
        return [r for r in self._records.values() if getattr(r, field, None) == value]

    def list_all(self) -> list[R]:
        return list(self._records.values())

    def update(self, record_id: int, fields: Mapping[str, Any]) -> R | None:
        """Merge ``fields`` onto an existing record and re-stamp ``updated_at``.

        Returns:
            The updated record, or None if ``record_id`` is unknown.
        """
        record = self._records.get(record_id)
        if record is None:
            return None

        updated = self._model.model_validate(
            {
                **record.model_dump(),
                **self._clean(fields),
                "updated_at": self._clock(),
            }
        )
        self._records[record_id] = updated
        return updated

    def delete(self, record_id: int) -> bool:
        """Remove a record. Returns True iff a record existed."""
        return self._records.pop(record_id, None) is not None
