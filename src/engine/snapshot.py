"""Log geçmişinden güncel stok görüntüsünü (snapshot) yeniden oluşturur."""

from __future__ import annotations

from src.engine.catalog import DEFAULT_LOCATION, GENERAL_SECTION
from src.models.stock import LogEntry, LogStore, StockSnapshot


def rebuild_snapshot(logs: LogStore, default_location: str = DEFAULT_LOCATION) -> StockSnapshot:
    """Günleri yeniden eskiye tarar; her (lokasyon, bölüm) için ilk görülen kaydı alır.

    Aynı gün içinde aynı bölüm için birden fazla kayıt varsa, günün kayıt
    sırasındaki ilk kayıt kazanır.
    """
    snapshot: StockSnapshot = {}
    for day in sorted(logs.keys(), reverse=True):
        for entry in logs[day]:
            location = entry.location or default_location
            section = entry.section or GENERAL_SECTION
            sections = snapshot.setdefault(location, {})
            if section not in sections:
                sections[section] = list(entry.items)
    return snapshot


def apply_entry(snapshot: StockSnapshot, entry: LogEntry) -> StockSnapshot:
    """Yeni kaydı snapshot'a uygular ve yeni bir snapshot döndürür."""
    updated = {location: dict(sections) for location, sections in snapshot.items()}
    updated.setdefault(entry.location, {})[entry.section] = list(entry.items)
    return updated
