"""Stok takip veri modelleri."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class Severity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"


class ResponseType(str, Enum):
    ASSISTANT = "assistant"
    ALERT = "alert"
    STOCK_REPORT = "stock-report"
    STOCK_UPDATE = "stock-update"
    TRANSFER = "transfer"


class Intent(str, Enum):
    GREETING = "greeting"
    HELP = "help"
    LOW_STOCK = "low_stock"
    ORDERS = "orders"
    STOCK_QUERY = "stock_query"
    SUMMARY = "summary"
    TRANSFER = "transfer"
    RESPONSIBILITIES = "responsibilities"
    RULES = "rules"
    STOCK_UPDATE = "stock_update"
    FALLBACK = "fallback"


def date_key(now: datetime) -> str:
    """Yerel takvim gününü YYYY-MM-DD anahtarına çevirir."""
    return now.strftime("%Y-%m-%d")


def time_label(now: datetime) -> str:
    return now.strftime("%H:%M")


def timestamp_millis(now: datetime) -> int:
    return int(now.timestamp() * 1000)


def format_quantity(quantity: float) -> str:
    """25.0 -> '25', 2.5 -> '2.5'."""
    if float(quantity).is_integer():
        return str(int(quantity))
    return f"{quantity:g}"


@dataclass(frozen=True)
class StockItem:
    name: str
    quantity: float
    unit: str = ""
    raw_text: str = ""

    def label(self) -> str:
        """Ekranda gösterilen 'miktar birim' metni."""
        return f"{format_quantity(self.quantity)} {self.unit}".rstrip()

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "raw_text": self.raw_text,
        }

    @classmethod
    def from_dict(cls, data: dict) -> StockItem:
        return cls(
            name=data.get("name", ""),
            quantity=float(data.get("quantity", 0) or 0),
            unit=data.get("unit", "") or "",
            raw_text=data.get("raw_text", "") or "",
        )


@dataclass(frozen=True)
class FlaggedItem:
    name: str
    quantity: float
    unit: str
    raw_text: str
    threshold: float
    severity: Severity

    @classmethod
    def from_item(cls, item: StockItem, threshold: float, severity: Severity) -> FlaggedItem:
        return cls(
            name=item.name,
            quantity=item.quantity,
            unit=item.unit,
            raw_text=item.raw_text,
            threshold=threshold,
            severity=severity,
        )

    def label(self) -> str:
        return f"{format_quantity(self.quantity)} {self.unit}".rstrip()


@dataclass(frozen=True)
class LocatedAlert:
    """Konum ve bölüm bilgisiyle zenginleştirilmiş uyarı."""
    item: FlaggedItem
    location: str
    section: str


@dataclass
class LogEntry:
    staff_id: str
    staff_name: str
    section: str
    location: str
    items: list[StockItem]
    time: str
    timestamp_millis: int

    def to_dict(self) -> dict:
        return {
            "staff_id": self.staff_id,
            "staff_name": self.staff_name,
            "section": self.section,
            "location": self.location,
            "items": [i.to_dict() for i in self.items],
            "time": self.time,
            "timestamp_millis": self.timestamp_millis,
        }

    @classmethod
    def from_dict(cls, data: dict) -> LogEntry:
        return cls(
            staff_id=data.get("staff_id", ""),
            staff_name=data.get("staff_name", ""),
            section=data.get("section", ""),
            location=data.get("location", ""),
            items=[StockItem.from_dict(i) for i in data.get("items", [])],
            time=data.get("time", ""),
            timestamp_millis=int(data.get("timestamp_millis", 0) or 0),
        )


@dataclass
class TransferRecord:
    staff_id: str
    staff_name: str
    date: str
    time: str
    to_location: str
    items: list[StockItem]
    timestamp_millis: int

    def to_dict(self) -> dict:
        return {
            "staff_id": self.staff_id,
            "staff_name": self.staff_name,
            "date": self.date,
            "time": self.time,
            "to_location": self.to_location,
            "items": [i.to_dict() for i in self.items],
            "timestamp_millis": self.timestamp_millis,
        }

    @classmethod
    def from_dict(cls, data: dict) -> TransferRecord:
        return cls(
            staff_id=data.get("staff_id", ""),
            staff_name=data.get("staff_name", ""),
            date=data.get("date", ""),
            time=data.get("time", ""),
            to_location=data.get("to_location", ""),
            items=[StockItem.from_dict(i) for i in data.get("items", [])],
            timestamp_millis=int(data.get("timestamp_millis", 0) or 0),
        )


@dataclass
class Section:
    name: str
    icon: str
    items: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"name": self.name, "icon": self.icon, "items": list(self.items)}

    @classmethod
    def from_dict(cls, data: dict) -> Section:
        return cls(name=data["name"], icon=data.get("icon", ""), items=list(data.get("items", [])))


@dataclass
class StaffMember:
    id: str
    name: str
    avatar: str = ""
    sections: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "avatar": self.avatar, "sections": list(self.sections)}

    @classmethod
    def from_dict(cls, data: dict) -> StaffMember:
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            avatar=data.get("avatar", ""),
            sections=list(data.get("sections", [])),
        )


@dataclass(frozen=True)
class SupplierSlot:
    supplier: str
    day: str
    note: str = ""


@dataclass(frozen=True)
class StockPayload:
    section: str
    location: str
    items: list[StockItem]


@dataclass(frozen=True)
class TransferPayload:
    to_location: str
    items: list[StockItem]


@dataclass
class ChatResponse:
    text: str
    type: ResponseType
    intent: Intent
    is_stock_update: bool = False
    stock_payload: Optional[StockPayload] = None
    is_transfer: bool = False
    transfer_data: Optional[TransferPayload] = None


# LogStore: {date_key: [LogEntry, ...]}
LogStore = dict[str, list[LogEntry]]
# StockSnapshot: {location: {section: [StockItem, ...]}}
StockSnapshot = dict[str, dict[str, list[StockItem]]]
# ThresholdTable: {item_name: minimum, "default": minimum}
ThresholdTable = dict[str, float]


def logs_to_dict(logs: LogStore) -> dict:
    return {day: [e.to_dict() for e in entries] for day, entries in logs.items()}


def logs_from_dict(data: Optional[dict]) -> LogStore:
    return {day: [LogEntry.from_dict(e) for e in entries] for day, entries in (data or {}).items()}


def transfers_to_list(transfers: list[TransferRecord]) -> list[dict]:
    return [t.to_dict() for t in transfers]


def transfers_from_list(data: Optional[list]) -> list[TransferRecord]:
    return [TransferRecord.from_dict(t) for t in (data or [])]
