"""Status persistence package."""
from chicken_door.storage.status_store import (
    StatusCorrupt,
    StatusNotFound,
    StatusStore,
    StatusStoreError,
)
from chicken_door.storage.file_store import JsonFileStatusStore
from chicken_door.storage.sql_store import SqlStatusStore

__all__ = [
    'StatusStore',
    'StatusStoreError',
    'StatusNotFound',
    'StatusCorrupt',
    'JsonFileStatusStore',
    'SqlStatusStore',
]
