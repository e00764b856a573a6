"""SQL-backed key-value storage."""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from photosearch.db.models import KeyValueEntry
from photosearch.db.session import Database
from photosearch.services.exceptions import StorageError


class SqlKeyValueStore:
    """Stores each slot as one ``key_value_entries`` row with a JSON list value."""

    def __init__(self, database: Database) -> None:
        self._database = database

    async def read(self, key: str) -> list[str] | None:
        try:
            async with self._database.session() as session:
                entry = await self._get_entry(session, key)
                value = entry.value if entry is not None else None
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to read slot {key!r}: {exc}") from exc

        if value is None:
            return None
        return _as_string_list(key, value)

    async def write(self, key: str, values: Sequence[str]) -> None:
        try:
            async with self._database.session() as session:
                entry = await self._get_entry(session, key)
                if entry is None:
                    session.add(KeyValueEntry(key=key, value=list(values)))
                else:
                    entry.value = list(values)
                await session.commit()
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to write slot {key!r}: {exc}") from exc

    @staticmethod
    async def _get_entry(session, key: str) -> KeyValueEntry | None:
        stmt = select(KeyValueEntry).where(KeyValueEntry.key == key)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


def _as_string_list(key: str, value: Any) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise StorageError(f"Slot {key!r} does not hold a list of strings.")
    return list(value)


__all__ = ["SqlKeyValueStore"]
