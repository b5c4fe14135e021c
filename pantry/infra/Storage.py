"""Key-value store of JSON documents on disk, one file per key.

Mirrors the browser ``localStorage`` contract the pantry relies on: values are
strings (JSON-serialized by the caller's repository), ``get_item`` returns None
for unknown keys and every ``set_item`` rewrites the whole value.
"""
import os
import re
import shutil
import tempfile
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r'^[A-Za-z0-9_.-]+$')


class JsonKeyValueStore:
    def __init__(self, directory):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()

    def set_item(self, key: str, value: str) -> None:
        """Atomically replace the stored value for key."""
        path = self._path(key)
        os.makedirs(self.directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{key}_", suffix=".json")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as tmp:
                tmp.write(value)
            shutil.move(tmp_path, path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
        logger.debug("Stored %s (%d bytes)", key, len(value))

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            pass
