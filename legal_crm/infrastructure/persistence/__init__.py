"""
Snapshot persistence adapters.
"""

from .json_file_store import JsonFileSnapshotStore
from .memory_store import InMemorySnapshotStore

__all__ = [
    "JsonFileSnapshotStore",
    "InMemorySnapshotStore",
]
