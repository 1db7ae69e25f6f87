"""Düşük stok eşik değerlendirmesi.

Bir ürün, miktarı kendi eşiğine eşit veya altındaysa işaretlenir.
Miktar 0 ise şiddet CRITICAL, aksi halde WARNING olur.
"""

from __future__ import annotations

import logging
import math
from numbers import Number
from typing import Iterable, Mapping, Optional

from src.models.stock import FlaggedItem, Severity, StockItem

logger = logging.getLogger(__name__)

DEFAULT_KEY = "default"


class ConfigurationError(ValueError):
    """Eksik veya geçersiz yapılandırma hatası."""
    pass


def validate_thresholds(thresholds: Mapping[str, float]) -> None:
    """Eşik tablosunu ilk kullanımdan önce doğrular.

    `default` anahtarı zorunludur; tüm değerler negatif olmayan sonlu sayılar olmalıdır.
    """
    if DEFAULT_KEY not in thresholds:
        raise ConfigurationError("Eşik tablosunda 'default' değeri tanımlı değil")
    for name, value in thresholds.items():
        if isinstance(value, bool) or not isinstance(value, Number):
            raise ConfigurationError(f"Geçersiz eşik değeri: {name}={value!r}")
        if not math.isfinite(value):
            raise ConfigurationError(f"Eşik değeri sonlu olmalı: {name}={value}")
        if value < 0:
            raise ConfigurationError(f"Eşik değeri negatif olamaz: {name}={value}")


def threshold_for(name: str, thresholds: Mapping[str, float]) -> float:
    """Ürüne özel eşik varsa onu, yoksa `default` değerini döndürür."""
    if name in thresholds:
        return thresholds[name]
    return thresholds.get(DEFAULT_KEY, 0)


def evaluate_item(item: StockItem, thresholds: Mapping[str, float]) -> Optional[FlaggedItem]:
    threshold = threshold_for(item.name, thresholds)
    if item.quantity > threshold:
        return None
    severity = Severity.CRITICAL if item.quantity == 0 else Severity.WARNING
    return FlaggedItem.from_item(item, threshold, severity)


def check_low_stock(items: Iterable[StockItem], thresholds: Mapping[str, float]) -> list[FlaggedItem]:
    """Eşik altındaki ürünleri giriş sırasını koruyarak döndürür."""
    flagged: list[FlaggedItem] = []
    for item in items:
        result = evaluate_item(item, thresholds)
        if result is not None:
            flagged.append(result)
    return flagged
