"""Key-value storage contract used by the search history."""

from __future__ import annotations

from typing import Protocol, Sequence


class KeyValueStore(Protocol):
    """Named slots holding ordered lists of strings.

    ``read`` returns ``None`` for a slot that was never written. ``write``
    replaces the whole slot at once. Backends raise ``StorageError`` on failure.
    """

    async def read(self, key: str) -> list[str] | None: ...

    async def write(self, key: str, values: Sequence[str]) -> None: ...


class MemoryKeyValueStore:
    """Process-local store, mainly for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, Sequence[str]] | None = None) -> None:
        self._slots: dict[str, list[str]] = {
            key: list(values) for key, values in (initial or {}).items()
        }

    async def read(self, key: str) -> list[str] | None:
        values = self._slots.get(key)
        return list(values) if values is not None else None

    async def write(self, key: str, values: Sequence[str]) -> None:
        self._slots[key] = list(values)


__all__ = ["KeyValueStore", "MemoryKeyValueStore"]
