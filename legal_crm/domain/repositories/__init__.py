"""
Repository interfaces for the domain layer.
"""

from .snapshot_store import SnapshotStore

__all__ = [
    "SnapshotStore",
]
