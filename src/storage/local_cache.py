"""Uzak depo erişilemediğinde kullanılan yerel JSON önbelleği."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CACHE_PREFIX = "sns_"


class LocalCache:
    def __init__(self, directory: Path) -> None:
        self._dir = Path(directory)

    def _path(self, key: str) -> Path:
        return self._dir / f"{CACHE_PREFIX}{key}.json"

    def read(self, key: str, default: Any = None) -> Any:
        path = self._path(key)
        if not path.exists():
            return default
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Önbellek okunamadı [%s]: %s", key, e)
            return default

    def write(self, key: str, value: Any) -> None:
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            self._path(key).write_text(json.dumps(value, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            logger.warning("Önbellek yazılamadı [%s]: %s", key, e)

    def clear(self) -> None:
        if not self._dir.exists():
            return
        for path in self._dir.glob(f"{CACHE_PREFIX}*.json"):
            path.unlink()
