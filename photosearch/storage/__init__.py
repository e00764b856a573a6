from photosearch.storage.base import KeyValueStore, MemoryKeyValueStore
from photosearch.storage.sql import SqlKeyValueStore

__all__ = [
    "KeyValueStore",
    "MemoryKeyValueStore",
    "SqlKeyValueStore",
]
