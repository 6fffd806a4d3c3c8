"""
In-memory snapshot store for tests and throwaway sessions.
"""

import copy
from typing import Any, Dict, Optional

from legal_crm.domain.repositories.snapshot_store import SnapshotStore


class InMemorySnapshotStore(SnapshotStore):
    """Snapshot store that keeps deep copies of every blob in a dict."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self.blobs: Dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self.save_count = 0

    def load(self, key: str) -> Optional[Any]:
        return copy.deepcopy(self.blobs.get(key))

    def save(self, key: str, blob: Any) -> None:
        self.blobs[key] = copy.deepcopy(blob)
        self.save_count += 1

    def delete(self, key: str) -> bool:
        return self.blobs.pop(key, None) is not None
