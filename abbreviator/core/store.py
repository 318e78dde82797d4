"""
Key-value stores for persisted options and cached rewrite decisions
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

import yaml

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Interface the settings service and content filter persist through"""

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class MemoryStore:
    """Dict-backed store, e.g. for a single process or tests"""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self):
        return list(self._data.keys())


class YamlFileStore(MemoryStore):
    """
    Store persisted as a YAML mapping on disk

    The whole file is rewritten on every change. Values must be plain YAML
    types (str, int, float, bool, lists and dicts of those).
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        data = {}

        if self.path.exists():
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValueError(f"Store file {self.path} does not hold a mapping")
            logger.debug(f"Loaded {len(data)} keys from {self.path}")

        super().__init__(data)

    def set(self, key: str, value: Any) -> None:
        super().set(key, value)
        self._save()

    def delete(self, key: str) -> None:
        super().delete(key)
        self._save()

    def _save(self):
        """Write to a temporary file next to the store and swap it in"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                yaml.safe_dump(self._data, f, default_flow_style=False, allow_unicode=True)
            os.replace(tmp_path, self.path)
        except Exception:
            Path(tmp_path).unlink(missing_ok=True)
            raise
