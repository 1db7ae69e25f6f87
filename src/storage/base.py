"""Anahtar-değer kalıcılık arayüzü.

Her anahtar bütün değer olarak okunur ve yazılır (kısmi güncelleme yok).
Aboneler değer değiştiğinde yeni değerin tamamını alır.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable

logger = logging.getLogger(__name__)

Callback = Callable[[Any], None]
Unsubscribe = Callable[[], None]

LOGS_KEY = "logs"
TRANSFERS_KEY = "xfers"
THRESHOLDS_KEY = "thresholds"
STAFF_KEY = "staff"
SECTIONS_KEY = "sections"
LOCATIONS_KEY = "locations"


class KeyValueStore(ABC):
    """Harici kalıcılık katmanı için temel sınıf."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Callback]] = {}

    @abstractmethod
    def load(self, key: str, default: Any = None) -> Any:
        ...

    @abstractmethod
    def save(self, key: str, value: Any) -> None:
        ...

    def subscribe(self, key: str, callback: Callback) -> Unsubscribe:
        """Bir anahtarın değişikliklerine abone olur; abonelikten çıkma fonksiyonu döndürür."""
        self._subscribers.setdefault(key, []).append(callback)

        def unsubscribe() -> None:
            callbacks = self._subscribers.get(key, [])
            if callback in callbacks:
                callbacks.remove(callback)

        return unsubscribe

    def _notify(self, key: str, value: Any) -> None:
        for callback in list(self._subscribers.get(key, [])):
            try:
                callback(value)
            except Exception as e:
                logger.error("Abone bildirimi hatası [%s]: %s", key, e)
