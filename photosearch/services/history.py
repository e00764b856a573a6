"""Recent search terms, bounded and deduplicated, for query suggestions."""

from __future__ import annotations

import asyncio

from photosearch.config import HistorySettings
from photosearch.logging import logger
from photosearch.services.exceptions import StorageError
from photosearch.storage.base import KeyValueStore


class SearchHistoryService:
    """Most-recent-first list of distinct queries kept in a key-value slot.

    A query that is already stored is left where it is; it is not moved to the
    front. When the list is full the oldest entry is dropped. Storage failures
    never reach the caller: a failed read looks like an empty history and a
    failed write is dropped after a warning.
    """

    def __init__(self, store: KeyValueStore, settings: HistorySettings | None = None) -> None:
        self._store = store
        self._settings = settings or HistorySettings()
        self._write_lock = asyncio.Lock()

    @property
    def capacity(self) -> int:
        return self._settings.max_entries

    async def record_query(self, query: str) -> None:
        async with self._write_lock:
            history = await self.get_history()
            if query in history:
                return

            if len(history) >= self.capacity:
                history = history[: self.capacity - 1]
            history.insert(0, query)

            try:
                await self._store.write(self._settings.key, history)
            except StorageError as exc:
                logger.warning("search_history_write_failed", key=self._settings.key, error=str(exc))

    async def get_history(self) -> list[str]:
        try:
            stored = await self._store.read(self._settings.key)
        except StorageError as exc:
            logger.warning("search_history_read_failed", key=self._settings.key, error=str(exc))
            return []
        return list(stored) if stored else []

    async def filter_history(self, prefix: str) -> list[str]:
        """Entries containing ``prefix`` anywhere, ignoring case, in stored order."""

        needle = prefix.lower()
        return [entry for entry in await self.get_history() if needle in entry.lower()]


__all__ = ["SearchHistoryService"]
