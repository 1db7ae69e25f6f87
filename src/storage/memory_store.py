"""Bellek içi anahtar-değer deposu (testler ve yerel çalışma için)."""

from __future__ import annotations

import copy
from typing import Any, Optional

from src.storage.base import KeyValueStore


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[dict[str, Any]] = None) -> None:
        super().__init__()
        self._data: dict[str, Any] = copy.deepcopy(initial or {})

    def load(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def save(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)
        self._notify(key, copy.deepcopy(value))

    def push_remote(self, key: str, value: Any) -> None:
        """Başka bir cihazdan gelmiş gibi değeri yazar ve aboneleri bilgilendirir."""
        self.save(key, value)
