"""Sohbet mesajı niyet yönlendiricisi.

Mesaj, sıralı (niyet, koşul, işleyici) kural tablosunda ilk eşleşen kurala
göre yanıtlanır. İşleyici None döndürürse sonraki kurallara geçilir.
Router hiçbir yan etki uygulamaz; kaydedilecek veri yanıtın içinde döner.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Mapping, Optional

from src.engine.catalog import GENERAL_SECTION, StockConfig
from src.engine.classifier import detect_location, detect_section
from src.engine.parser import parse_stock
from src.engine.thresholds import check_low_stock, evaluate_item
from src.models.stock import (
    ChatResponse,
    Intent,
    LocatedAlert,
    LogStore,
    ResponseType,
    Severity,
    StaffMember,
    StockPayload,
    StockSnapshot,
    TransferPayload,
    date_key,
    format_quantity,
    time_label,
)

logger = logging.getLogger(__name__)

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

GREETING_RE = re.compile(r"^(hi|hello|hey|good\s*(morning|evening|afternoon))")
HELP_RE = re.compile(r"help|how\s*to|what\s*can")
LOW_STOCK_RE = re.compile(r"low\s*stock|shortage|running\s*(low|out)|what.*need")
SCHEDULE_RE = re.compile(r"schedule")
ORDERS_RE = re.compile(r"order|schedule|supplier")
STOCK_QUERY_RE = re.compile(r"what('?s| is).*stock|show.*stock|check.*stock|status")
STOCK_QUESTION_RE = re.compile(r"stock.*\?")
SUMMARY_RE = re.compile(r"(daily\s*)?summary|overview")
TRANSFER_RE = re.compile(r"sent\s*to|transfer|moved\s*to|sending")
RESPONSIBILITIES_RE = re.compile(r"who|responsib|assign|my\s*section")
RULES_RE = re.compile(r"rule|fifo|quality|expiry|wastage")

HELP_TEXT = (
    "📖 *SnS Stock Agent*\n\n"
    "*Log Stock:* Paste your list:\n"
    '"Sambar: 25\\nTamarind: 8"\n'
    "✅ Auto-logged with name, time, section\n\n"
    "*View Logs:* Open 📒 Log Book\n"
    "  📋 Daily logs by date/section\n"
    "  📈 Item trends over time\n"
    "  👥 Staff completion tracker\n\n"
    "*Commands:*\n"
    '"Show [section] stock"\n'
    '"Low stock" — alerts\n'
    '"Orders" — schedule\n'
    '"Summary" — overview\n'
    '"Rules" — guidelines'
)

RULES_TEXT = (
    "📌 *Rules*\n\n"
    "1️⃣ Remind *one day before* ordering\n"
    "2️⃣ Accountable for section wastage\n"
    "3️⃣ Quality, freshness, expiry, FIFO\n"
    "4️⃣ Report low stock *immediately*\n"
    "5️⃣ Report wastage/spoilage ASAP"
)

FALLBACK_TEXT = (
    "Try:\n"
    "• Paste stock list to log\n"
    '• "Low stock"\n'
    '• "Show cool room stock"\n'
    '• "Orders"\n'
    '• "Summary"\n'
    '• "Help"\n'
    "Or open 📒 Log Book"
)

ALL_HEALTHY_TEXT = "✅ All stock levels healthy!"


@dataclass
class RouteContext:
    """Tek bir mesajın yönlendirilmesi için gereken tüm girdiler."""
    text: str
    lowered: str
    snapshot: StockSnapshot
    user: StaffMember
    logs: LogStore
    thresholds: Mapping[str, float]
    config: StockConfig
    now: datetime

    @property
    def today_logs(self) -> list:
        return self.logs.get(date_key(self.now), [])


Handler = Callable[[RouteContext], Optional[ChatResponse]]


def _dot(severity: Optional[Severity], ok: str = "🟢") -> str:
    if severity is Severity.CRITICAL:
        return "🔴"
    if severity is Severity.WARNING:
        return "🟡"
    return ok


def _greeting_word(now: datetime) -> str:
    if now.hour < 12:
        return "Good morning"
    if now.hour < 17:
        return "Good afternoon"
    return "Good evening"


# --- İşleyiciler ---

def handle_greeting(ctx: RouteContext) -> ChatResponse:
    today_logs = ctx.today_logs
    logged_ids = {entry.staff_id for entry in today_logs}
    pending = [s for s in ctx.config.staff if s.id not in logged_ids]

    text = f"{_greeting_word(ctx.now)} {ctx.user.name}! 👋\n\n📅 *Today:* {len(today_logs)} update(s) logged\n"
    if 0 < len(pending) < len(ctx.config.staff):
        text += f"⏳ Awaiting: {', '.join(s.name for s in pending)}\n"
    text += (
        "\n📋 Paste stock to log it\n📒 Open *Log Book* for history\n"
        '⚠️ "Low stock" for alerts\n📦 "Orders" for schedule'
    )
    return ChatResponse(text=text, type=ResponseType.ASSISTANT, intent=Intent.GREETING)


def handle_help(ctx: RouteContext) -> ChatResponse:
    return ChatResponse(text=HELP_TEXT, type=ResponseType.ASSISTANT, intent=Intent.HELP)


def collect_alerts(snapshot: StockSnapshot, thresholds: Mapping[str, float]) -> list[LocatedAlert]:
    """Snapshot'taki tüm lokasyon/bölümler için eşik altı ürünleri toplar."""
    alerts: list[LocatedAlert] = []
    for location, sections in snapshot.items():
        for section, items in sections.items():
            for flagged in check_low_stock(items, thresholds):
                alerts.append(LocatedAlert(item=flagged, location=location, section=section))
    return alerts


def handle_low_stock(ctx: RouteContext) -> ChatResponse:
    alerts = collect_alerts(ctx.snapshot, ctx.thresholds)
    if not alerts:
        return ChatResponse(text=ALL_HEALTHY_TEXT, type=ResponseType.ASSISTANT, intent=Intent.LOW_STOCK)

    critical = [a for a in alerts if a.item.severity is Severity.CRITICAL]
    warning = [a for a in alerts if a.item.severity is Severity.WARNING]

    text = "⚠️ *Low Stock Alert*\n\n"
    if critical:
        text += f"🔴 *OUT OF STOCK ({len(critical)}):*\n"
        for a in critical:
            text += f"  • {a.item.name} — {a.location} ({a.section})\n"
        text += "\n"
    if warning:
        text += f"🟡 *LOW ({len(warning)}):*\n"
        for a in warning:
            text += f"  • {a.item.name}: {a.item.label()} — {a.location} ({a.section}) [min:{format_quantity(a.item.threshold)}]\n"
    return ChatResponse(text=text, type=ResponseType.ALERT, intent=Intent.LOW_STOCK)


def handle_orders(ctx: RouteContext) -> ChatResponse:
    today = WEEKDAYS[ctx.now.weekday()]
    text = "📦 *Ordering Schedule*\n\n"
    for slot in ctx.config.schedule:
        is_today = today in slot.day
        text += f"{'👉 ' if is_today else '  '}*{slot.supplier}* — {slot.day}{' ⬅️ TODAY' if is_today else ''}"
        if slot.note:
            text += f"\n     {slot.note}"
        text += "\n"
    return ChatResponse(text=text, type=ResponseType.ASSISTANT, intent=Intent.ORDERS)


def handle_stock_query(ctx: RouteContext) -> ChatResponse:
    section = detect_section(ctx.lowered)
    location = detect_location(ctx.lowered) or ctx.config.default_location
    items = ctx.snapshot.get(location, {}).get(section) if section else None

    if items:
        text = f"📊 *{section} — {location}*\n\n"
        flagged = 0
        for item in items:
            result = evaluate_item(item, ctx.thresholds)
            if result is not None:
                flagged += 1
            text += f"{_dot(result.severity if result else None)} {item.name}: *{item.label()}*\n"
        if flagged:
            text += f"\n⚠️ {flagged} item(s) flagged!"
        return ChatResponse(text=text, type=ResponseType.STOCK_REPORT, intent=Intent.STOCK_QUERY)

    listing = "\n".join(f"{s.icon} {s.name}" for s in ctx.config.sections)
    return ChatResponse(
        text=f"Section not found. Try:\n{listing}",
        type=ResponseType.ASSISTANT,
        intent=Intent.STOCK_QUERY,
    )


def handle_summary(ctx: RouteContext) -> ChatResponse:
    today_logs = ctx.today_logs
    staff_done = len({entry.staff_id for entry in today_logs})
    text = (
        f"📊 *Summary*\n\n📝 Today: {len(today_logs)} updates\n"
        f"👥 Staff: {staff_done}/{len(ctx.config.staff)}\n\n"
    )
    for location, sections in ctx.snapshot.items():
        text += f"📍 *{location}*\n"
        for section, items in sections.items():
            flagged = check_low_stock(items, ctx.thresholds)
            if any(f.severity is Severity.CRITICAL for f in flagged):
                dot = "🔴"
            elif flagged:
                dot = "🟡"
            else:
                dot = "🟢"
            low = f" ({len(flagged)} low)" if flagged else ""
            text += f"  {dot} {section}: {len(items)} items{low}\n"
        text += "\n"
    return ChatResponse(text=text, type=ResponseType.STOCK_REPORT, intent=Intent.SUMMARY)


def handle_transfer(ctx: RouteContext) -> Optional[ChatResponse]:
    location = detect_location(ctx.lowered) or ctx.config.default_transfer_location
    items = parse_stock(ctx.text)
    if not items:
        return None
    text = f"📦 *Transfer Logged!*\n➡️ {location} · {ctx.user.name} · {time_label(ctx.now)}\n\n"
    for item in items:
        text += f"  • {item.name}: {item.label()}\n"
    return ChatResponse(
        text=text,
        type=ResponseType.TRANSFER,
        intent=Intent.TRANSFER,
        is_transfer=True,
        transfer_data=TransferPayload(to_location=location, items=items),
    )


def handle_responsibilities(ctx: RouteContext) -> ChatResponse:
    text = "👥 *Responsibilities*\n\n"
    for staff in ctx.config.staff:
        you = " (You)" if staff.id == ctx.user.id else ""
        text += f"{staff.avatar} *{staff.name}*{you}\n   {' · '.join(staff.sections)}\n\n"
    return ChatResponse(text=text, type=ResponseType.ASSISTANT, intent=Intent.RESPONSIBILITIES)


def handle_rules(ctx: RouteContext) -> ChatResponse:
    return ChatResponse(text=RULES_TEXT, type=ResponseType.ASSISTANT, intent=Intent.RULES)


def handle_stock_update(ctx: RouteContext) -> Optional[ChatResponse]:
    items = parse_stock(ctx.text)
    if len(items) < 2:
        return None
    section = detect_section(ctx.text) or GENERAL_SECTION
    location = detect_location(ctx.text) or ctx.config.default_location
    flagged = check_low_stock(items, ctx.thresholds)

    text = (
        f"✅ *Stock Logged!*\n\n📍 *{location}* — {section}\n"
        f"👤 *{ctx.user.name}* · 🕐 {time_label(ctx.now)}\n📅 Saved to today's log\n\n"
    )
    for item in items:
        result = evaluate_item(item, ctx.thresholds)
        text += f"{_dot(result.severity if result else None, ok='✅')} {item.name}: {item.label()}\n"
    if flagged:
        text += f"\n⚠️ *{len(flagged)} flagged:*\n"
        for f in flagged:
            status = "OUT" if f.severity is Severity.CRITICAL else "LOW"
            text += f"  🔔 *{f.name}* {status} ({format_quantity(f.quantity)}, min:{format_quantity(f.threshold)})\n"
    else:
        text += "\n👍 All OK."

    return ChatResponse(
        text=text,
        type=ResponseType.STOCK_UPDATE,
        intent=Intent.STOCK_UPDATE,
        is_stock_update=True,
        stock_payload=StockPayload(section=section, location=location, items=items),
    )


def handle_fallback(ctx: RouteContext) -> ChatResponse:
    return ChatResponse(text=FALLBACK_TEXT, type=ResponseType.ASSISTANT, intent=Intent.FALLBACK)


# --- Kural tablosu ---

def _always(ctx: RouteContext) -> bool:
    return True


ROUTES: list[tuple[Intent, Callable[[RouteContext], bool], Handler]] = [
    (Intent.GREETING, lambda c: bool(GREETING_RE.search(c.lowered)), handle_greeting),
    (Intent.HELP, lambda c: bool(HELP_RE.search(c.lowered)), handle_help),
    (
        Intent.LOW_STOCK,
        lambda c: bool(LOW_STOCK_RE.search(c.lowered)) and not SCHEDULE_RE.search(c.lowered),
        handle_low_stock,
    ),
    (Intent.ORDERS, lambda c: bool(ORDERS_RE.search(c.lowered)), handle_orders),
    (
        Intent.STOCK_QUERY,
        lambda c: bool(STOCK_QUERY_RE.search(c.lowered) or STOCK_QUESTION_RE.search(c.lowered)),
        handle_stock_query,
    ),
    (Intent.SUMMARY, lambda c: bool(SUMMARY_RE.search(c.lowered)), handle_summary),
    (Intent.TRANSFER, lambda c: bool(TRANSFER_RE.search(c.lowered)), handle_transfer),
    (Intent.RESPONSIBILITIES, lambda c: bool(RESPONSIBILITIES_RE.search(c.lowered)), handle_responsibilities),
    (Intent.RULES, lambda c: bool(RULES_RE.search(c.lowered)), handle_rules),
    (Intent.STOCK_UPDATE, _always, handle_stock_update),
    (Intent.FALLBACK, _always, handle_fallback),
]


def generate_response(
    text: str,
    snapshot: StockSnapshot,
    user: StaffMember,
    logs: LogStore,
    thresholds: Mapping[str, float],
    config: StockConfig,
    now: datetime,
) -> ChatResponse:
    """Mesajı kural tablosuna göre yanıtlar."""
    ctx = RouteContext(
        text=text,
        lowered=text.lower().strip(),
        snapshot=snapshot,
        user=user,
        logs=logs,
        thresholds=thresholds,
        config=config,
        now=now,
    )
    for intent, predicate, handler in ROUTES:
        if not predicate(ctx):
            continue
        response = handler(ctx)
        if response is not None:
            logger.debug("Mesaj yönlendirildi: %s", intent.value)
            return response
    # Son kural her zaman yanıt döndürür
    return handle_fallback(ctx)
