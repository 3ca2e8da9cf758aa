"""
Storage chiave/valore persistente per lo stato del client.

Un file JSON per chiave nella directory dati (``ZNOTE_DATA_DIR``, default
``~/.znote``). Le scritture passano da un file temporaneo e ``os.replace``:
un crash non lascia mai una chiave scritta a metà.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

_SAFE_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


def default_data_dir() -> Path:
    return Path(os.environ.get("ZNOTE_DATA_DIR", Path.home() / ".znote"))


class LocalStorage:
    def __init__(self, directory: Optional[Union[str, Path]] = None):
        self.directory = Path(directory) if directory else default_data_dir()
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY_RE.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str, default: Any = None) -> Any:
        path = self._path(key)
        if not path.exists():
            return default
        try:
            with path.open("r", encoding="utf-8") as fh:
                return json.load(fh)
        except ValueError:
            # JSON o UTF-8 non valido
            logger.warning("Chiave di storage %s corrotta, contenuto ignorato", key)
            return default

    def set(self, key: str, value: Any) -> None:
        path = self._path(key)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(value, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def remove(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()
