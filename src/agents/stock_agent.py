"""Stock Agent - Sohbet mesajlarını işler ve stok loglarını kalıcı hale getirir.

- Depodan log, transfer, eşik ve katalog verilerini yükler
- Snapshot'ı loglardan yeniden oluşturur
- Mesajları router'a iletir, dönen stok/transfer verisini kaydeder
- Uzak değişikliklerde tüm durumu değiştirir ve snapshot'ı yeniden kurar
- Eşik ve katalog yönetimini sağlar
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Optional

from src.engine.catalog import DEFAULT_THRESHOLDS, StockConfig
from src.engine.router import generate_response
from src.engine.snapshot import apply_entry, rebuild_snapshot
from src.engine.thresholds import ConfigurationError, validate_thresholds
from src.models.stock import (
    ChatResponse,
    LogEntry,
    LogStore,
    Section,
    StaffMember,
    StockSnapshot,
    TransferRecord,
    date_key,
    logs_from_dict,
    logs_to_dict,
    time_label,
    timestamp_millis,
    transfers_from_list,
    transfers_to_list,
)
from src.storage.base import (
    LOCATIONS_KEY,
    LOGS_KEY,
    SECTIONS_KEY,
    STAFF_KEY,
    THRESHOLDS_KEY,
    TRANSFERS_KEY,
    KeyValueStore,
    Unsubscribe,
)

logger = logging.getLogger(__name__)


class StockAgent:
    """Sohbet akışının durum sahibi: loglar, transferler, eşikler ve snapshot."""

    def __init__(
        self,
        store: KeyValueStore,
        config: Optional[StockConfig] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.config = config or StockConfig()
        self._clock = clock

        self.logs: LogStore = {}
        self.transfers: list[TransferRecord] = []
        self.thresholds: dict[str, float] = dict(DEFAULT_THRESHOLDS)
        self.snapshot: StockSnapshot = {}

        self._unsubscribers: list[Unsubscribe] = []
        # Şu an kaydedilmekte olan anahtarlar; bu kayıtların bildirimi yok sayılır
        self._saving: set[str] = set()

    # --- Yükleme ---

    def load(self) -> None:
        """Tüm durumu depodan okur; eşik tablosu geçersizse ConfigurationError fırlatır."""
        self.logs = logs_from_dict(self.store.load(LOGS_KEY, {}))
        self.transfers = transfers_from_list(self.store.load(TRANSFERS_KEY, []))
        thresholds = self.store.load(THRESHOLDS_KEY, None)
        if thresholds is not None:
            validate_thresholds(thresholds)
            self.thresholds = dict(thresholds)
        else:
            validate_thresholds(self.thresholds)
        self._load_catalog()
        self.snapshot = rebuild_snapshot(self.logs, self.config.default_location)

        logger.info(
            "Durum yüklendi: %d gün, %d transfer, %d eşik",
            len(self.logs),
            len(self.transfers),
            len(self.thresholds),
        )

    def _load_catalog(self) -> None:
        staff = self.store.load(STAFF_KEY, None)
        if staff:
            self.config.staff = [StaffMember.from_dict(s) for s in staff]
        sections = self.store.load(SECTIONS_KEY, None)
        if sections:
            self.config.sections = [Section.from_dict(s) for s in sections]
        locations = self.store.load(LOCATIONS_KEY, None)
        if locations:
            self.config.locations = list(locations)

    # --- Canlı senkronizasyon ---

    def start_sync(self) -> None:
        """Uzak değişikliklere abone olur."""
        if self._unsubscribers:
            return
        self._unsubscribers = [
            self.store.subscribe(LOGS_KEY, self._on_logs_changed),
            self.store.subscribe(TRANSFERS_KEY, self._on_transfers_changed),
            self.store.subscribe(THRESHOLDS_KEY, self._on_thresholds_changed),
        ]
        logger.info("Canlı senkronizasyon başlatıldı")

    def stop_sync(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def _is_echo(self, key: str) -> bool:
        return key in self._saving

    def _on_logs_changed(self, value: Any) -> None:
        if self._is_echo(LOGS_KEY):
            return
        self.logs = logs_from_dict(value)
        self.snapshot = rebuild_snapshot(self.logs, self.config.default_location)
        logger.info("Loglar uzaktan güncellendi: %d gün", len(self.logs))

    def _on_transfers_changed(self, value: Any) -> None:
        if self._is_echo(TRANSFERS_KEY):
            return
        self.transfers = transfers_from_list(value)

    def _on_thresholds_changed(self, value: Any) -> None:
        if self._is_echo(THRESHOLDS_KEY):
            return
        try:
            validate_thresholds(value)
        except ConfigurationError as e:
            logger.warning("Uzaktan gelen eşik tablosu reddedildi: %s", e)
            return
        self.thresholds = dict(value)
        logger.info("Eşikler uzaktan güncellendi")

    def _save(self, key: str, value: Any) -> None:
        self._saving.add(key)
        try:
            self.store.save(key, value)
        finally:
            self._saving.discard(key)

    # --- Mesaj işleme ---

    def send(self, user: Optional[StaffMember], text: str, now: Optional[datetime] = None) -> Optional[ChatResponse]:
        """Mesajı yanıtlar ve dönen stok/transfer verisini kaydeder."""
        if user is None:
            raise ValueError("Mesaj göndermek için kullanıcı seçilmeli")
        text = (text or "").strip()
        if not text:
            return None
        now = now or self._clock()

        response = generate_response(
            text, self.snapshot, user, self.logs, self.thresholds, self.config, now
        )

        if response.is_stock_update and response.stock_payload:
            payload = response.stock_payload
            entry = LogEntry(
                staff_id=user.id,
                staff_name=user.name,
                section=payload.section,
                location=payload.location,
                items=list(payload.items),
                time=time_label(now),
                timestamp_millis=timestamp_millis(now),
            )
            self.record_entry(entry, now)

        if response.is_transfer and response.transfer_data:
            record = TransferRecord(
                staff_id=user.id,
                staff_name=user.name,
                date=date_key(now),
                time=time_label(now),
                to_location=response.transfer_data.to_location,
                items=list(response.transfer_data.items),
                timestamp_millis=timestamp_millis(now),
            )
            self.record_transfer(record)

        return response

    def record_entry(self, entry: LogEntry, now: datetime) -> None:
        day = date_key(now)
        self.logs = {**self.logs, day: [*self.logs.get(day, []), entry]}
        self._save(LOGS_KEY, logs_to_dict(self.logs))
        self.snapshot = apply_entry(self.snapshot, entry)
        logger.info(
            "Stok kaydı eklendi: %s / %s (%d ürün, %s)",
            entry.location,
            entry.section,
            len(entry.items),
            entry.staff_name,
        )

    def record_transfer(self, record: TransferRecord) -> None:
        self.transfers = [*self.transfers, record]
        self._save(TRANSFERS_KEY, transfers_to_list(self.transfers))
        logger.info("Transfer kaydedildi: -> %s (%d ürün)", record.to_location, len(record.items))

    def now(self) -> datetime:
        return self._clock()

    def welcome(self, user: StaffMember, now: Optional[datetime] = None) -> str:
        """Giriş sonrası karşılama mesajı."""
        now = now or self._clock()
        today_count = len(self.logs.get(date_key(now), []))
        sections = ", ".join(f"📌 {s}" for s in user.sections)
        return (
            f"Welcome, *{user.name}*! 👋\n\nYour sections: {sections}\n\n"
            f"📅 *Today:* {today_count} update(s) logged\n\n"
            "📋 Paste stock to log it\n📒 Open *Log Book* for history\n"
            '⚠️ "Low stock" for alerts\n📦 "Orders" for schedule'
        )

    # --- Eşik ve katalog yönetimi ---

    def set_threshold(self, name: str, threshold: float) -> None:
        """Bir ürün için minimum stok eşiğini ayarlar ve kaydeder."""
        thresholds = {**self.thresholds, name: threshold}
        validate_thresholds(thresholds)
        self.thresholds = thresholds
        self._save(THRESHOLDS_KEY, dict(self.thresholds))

    def remove_threshold(self, name: str) -> None:
        if name == "default":
            raise ValueError("'default' eşiği silinemez")
        self.thresholds = {k: v for k, v in self.thresholds.items() if k != name}
        self._save(THRESHOLDS_KEY, dict(self.thresholds))

    def update_catalog(
        self,
        locations: Optional[list[str]] = None,
        sections: Optional[list[Section]] = None,
        staff: Optional[list[StaffMember]] = None,
    ) -> None:
        """Yönetim ekranından gelen şube, bölüm ve personel listelerini kaydeder."""
        if locations is not None:
            self.config.locations = list(locations)
            self._save(LOCATIONS_KEY, list(locations))
        if sections is not None:
            self.config.sections = list(sections)
            self._save(SECTIONS_KEY, [s.to_dict() for s in sections])
        if staff is not None:
            self.config.staff = list(staff)
            self._save(STAFF_KEY, [s.to_dict() for s in staff])
