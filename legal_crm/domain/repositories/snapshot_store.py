"""
Snapshot store interface.
Defines the contract for loading and saving JSON-shaped blobs by key.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class SnapshotStore(ABC):
    """
    Key-value persistence port.
    Each key holds one JSON-serializable blob (a collection snapshot or a
    small marker such as the alert dismissal date).
    """

    @abstractmethod
    def load(self, key: str) -> Optional[Any]:
        """
        Load the blob stored under a key.
        Returns None if nothing was stored yet.
        """
        pass

    @abstractmethod
    def save(self, key: str, blob: Any) -> None:
        """
        Overwrite the blob stored under a key.
        Implementations must replace the previous value atomically.
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove a key.
        Returns True if removed, False if it did not exist.
        """
        pass
