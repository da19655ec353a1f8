# fittrack/repositories/base.py
from __future__ import annotations
from typing import Any, Generic, TypeVar

from fittrack.db import RecordStore

T = TypeVar("T")  # table record type (has to_row / from_row)

class BaseRepository(Generic[T]):
    """Lightweight base for repositories over one store table."""
    model: type

    def __init__(self, store: RecordStore):
        self.store = store

    @property
    def table(self) -> str:
        return self.model.__tablename__

    def find(self, **filters: Any) -> list[T]:
        rows = self.store.query(self.table, filters)
        return [self.model.from_row(r) for r in rows]

    def add(self, entity: T) -> None:
        # the stored representation is not re-read; the entity is already complete
        self.store.insert(self.table, entity.to_row())

    def delete(self, entity_id: str) -> None:
        self.store.delete(self.table, entity_id)
