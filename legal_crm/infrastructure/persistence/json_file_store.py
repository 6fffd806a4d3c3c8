"""
JSON file snapshot store.
Keeps one <key>.json file per collection in a data directory.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Union

from legal_crm.domain.repositories.snapshot_store import SnapshotStore


logger = logging.getLogger(__name__)


class JsonFileSnapshotStore(SnapshotStore):
    """
    Snapshot store backed by JSON files.

    Writes go to a temporary file in the same directory and are moved into
    place with os.replace, so a crash never leaves a half-written snapshot.
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        """Get the file path of a snapshot key."""
        return self.directory / f"{key}.json"

    def load(self, key: str) -> Optional[Any]:
        path = self.path_for(key)
        if not path.exists():
            return None

        try:
            with path.open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except json.JSONDecodeError as e:
            logger.error(f"Snapshot {path} is not valid JSON: {str(e)}")
            return None

    def save(self, key: str, blob: Any) -> None:
        path = self.path_for(key)
        fd, temp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(blob, handle, ensure_ascii=False, indent=2)
            os.replace(temp_name, path)
        except BaseException:
            if os.path.exists(temp_name):
                os.unlink(temp_name)
            raise

        logger.debug(f"Saved snapshot {key} to {path}")

    def delete(self, key: str) -> bool:
        path = self.path_for(key)
        if not path.exists():
            return False
        path.unlink()
        return True
