"""Log Book sorguları: günlük kayıtlar, stok dışı/düşük raporu, trendler ve personel durumu."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping, Optional

from src.engine.thresholds import threshold_for
from src.models.stock import (
    LogEntry,
    LogStore,
    StaffMember,
    StockItem,
    TransferRecord,
    date_key,
)

TREND_DAYS = 30


@dataclass(frozen=True)
class DayAlert:
    item: StockItem
    section: str
    location: str
    staff_name: str
    time: str
    threshold: Optional[float] = None


@dataclass(frozen=True)
class TrendPoint:
    date: str
    quantity: float
    unit: str
    location: str


@dataclass
class StaffStatus:
    staff: StaffMember
    logged: int
    entries: list[LogEntry] = field(default_factory=list)


def log_dates(logs: LogStore, today: datetime) -> list[str]:
    """Bugün dahil, kaydı olan tüm günleri yeniden eskiye döndürür."""
    return sorted({date_key(today), *logs.keys()}, reverse=True)


def log_totals(logs: LogStore) -> tuple[int, int]:
    """(gün sayısı, toplam kayıt sayısı)."""
    return len(logs), sum(len(entries) for entries in logs.values())


def day_entries(
    logs: LogStore,
    day: str,
    section: Optional[str] = None,
    location: Optional[str] = None,
) -> list[LogEntry]:
    return [
        entry
        for entry in logs.get(day, [])
        if (section is None or entry.section == section)
        and (location is None or entry.location == location)
    ]


def stock_alerts_for_day(
    logs: LogStore, day: str, thresholds: Mapping[str, float]
) -> tuple[list[DayAlert], list[DayAlert]]:
    """Günün kayıtlarındaki stok dışı (miktar 0) ve düşük ürünleri döndürür."""
    out_of_stock: list[DayAlert] = []
    low: list[DayAlert] = []
    for entry in logs.get(day, []):
        for item in entry.items:
            threshold = threshold_for(item.name, thresholds)
            if item.quantity == 0:
                out_of_stock.append(
                    DayAlert(item, entry.section, entry.location, entry.staff_name, entry.time)
                )
            elif item.quantity <= threshold:
                low.append(
                    DayAlert(item, entry.section, entry.location, entry.staff_name, entry.time, threshold)
                )
    return out_of_stock, low


def item_trend(logs: LogStore, name: str, today: datetime, days: int = TREND_DAYS) -> list[TrendPoint]:
    """Son `days` gün için, her günün ilk eşleşen kaydından trend noktası üretir.

    Noktalar eskiden yeniye sıralıdır.
    """
    points: list[TrendPoint] = []
    for day in reversed(log_dates(logs, today)[:days]):
        for entry in logs.get(day, []):
            found = next((i for i in entry.items if i.name == name), None)
            if found is not None:
                points.append(TrendPoint(day, found.quantity, found.unit, entry.location))
                break
    return points


def staff_status(logs: LogStore, day: str, staff: list[StaffMember]) -> list[StaffStatus]:
    entries = logs.get(day, [])
    result = []
    for member in staff:
        own = [e for e in entries if e.staff_id == member.id]
        result.append(StaffStatus(staff=member, logged=len(own), entries=own))
    return result


def transfers_on(transfers: list[TransferRecord], day: str) -> list[TransferRecord]:
    return [t for t in transfers if t.date == day]
