"""SQLite storage for household records."""

from .schema import ensure_schema
from .store import TABLES, RecordStore, StoreError

__all__ = [
    "RecordStore",
    "StoreError",
    "TABLES",
    "ensure_schema",
]
