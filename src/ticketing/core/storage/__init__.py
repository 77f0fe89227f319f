"""Record stores for file-backed entity collections."""

from .record_store import (
    CorruptStoreError,
    InMemoryRecordStore,
    JsonFileRecordStore,
    RecordStore,
    StoreError,
    StoreIOError,
    get_record_store,
)

__all__ = [
    "CorruptStoreError",
    "InMemoryRecordStore",
    "JsonFileRecordStore",
    "RecordStore",
    "StoreError",
    "StoreIOError",
    "get_record_store",
]
