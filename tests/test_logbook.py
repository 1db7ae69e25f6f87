"""Log Book sorguları unit testleri."""

from datetime import datetime

from src.engine.catalog import StockConfig
from src.engine.logbook import (
    day_entries,
    item_trend,
    log_dates,
    log_totals,
    staff_status,
    stock_alerts_for_day,
    transfers_on,
)
from src.models.stock import LogEntry, StockItem, TransferRecord

TODAY = datetime(2026, 10, 19, 10, 0)


def _entry(section, location, items, staff_id="sapna", time="09:00"):
    return LogEntry(
        staff_id=staff_id,
        staff_name=staff_id.title(),
        section=section,
        location=location,
        items=[StockItem(name, qty, unit) for name, qty, unit in items],
        time=time,
        timestamp_millis=0,
    )


def _logs():
    return {
        "2026-10-17": [_entry("Cool Room", "Vic Park", [("Dal", 6, "kg")])],
        "2026-10-18": [
            _entry("Dairy", "Nedlands", [("Milk", 3, "litre")], staff_id="simran"),
            _entry("Cool Room", "Nedlands", [("Dal", 4, "kg")], staff_id="charles"),
        ],
        "2026-10-19": [
            _entry("Cool Room", "Vic Park", [("Dal", 1, "kg"), ("Butter Sauce", 0, ""), ("Sambar", 20, "")]),
            _entry("Cool Room", "Vic Park", [("Dal", 2, "kg")], time="15:00"),
        ],
    }


class TestDayEntries:
    def test_filters(self):
        logs = _logs()
        assert len(day_entries(logs, "2026-10-18")) == 2
        assert len(day_entries(logs, "2026-10-18", section="Dairy")) == 1
        assert len(day_entries(logs, "2026-10-18", location="Vic Park")) == 0
        assert day_entries(logs, "2026-01-01") == []

    def test_dates_and_totals(self):
        logs = _logs()
        assert log_dates(logs, TODAY) == ["2026-10-19", "2026-10-18", "2026-10-17"]
        assert log_dates({}, TODAY) == ["2026-10-19"]
        assert log_totals(logs) == (3, 5)


class TestStockAlertsForDay:
    def test_out_of_stock_and_low(self):
        oos, low = stock_alerts_for_day(_logs(), "2026-10-19", {"default": 2, "Sambar": 10})
        assert [a.item.name for a in oos] == ["Butter Sauce"]
        assert oos[0].location == "Vic Park"
        assert oos[0].staff_name == "Sapna"
        assert [(a.item.name, a.time) for a in low] == [("Dal", "09:00"), ("Dal", "15:00")]
        assert low[0].threshold == 2


class TestItemTrend:
    def test_oldest_first_first_match_per_day(self):
        points = item_trend(_logs(), "Dal", TODAY)
        assert [(p.date, p.quantity, p.location) for p in points] == [
            ("2026-10-17", 6, "Vic Park"),
            ("2026-10-18", 4, "Nedlands"),
            ("2026-10-19", 1, "Vic Park"),
        ]
        assert points[0].unit == "kg"

    def test_window_limits_days(self):
        points = item_trend(_logs(), "Dal", TODAY, days=2)
        assert [p.date for p in points] == ["2026-10-18", "2026-10-19"]

    def test_unknown_item(self):
        assert item_trend(_logs(), "Saffron", TODAY) == []


class TestStaffStatus:
    def test_counts_per_staff(self):
        config = StockConfig()
        status = {s.staff.id: s.logged for s in staff_status(_logs(), "2026-10-19", config.staff)}
        assert status["sapna"] == 2
        assert status["simran"] == 0
        assert len(status) == len(config.staff)


class TestTransfersOn:
    def test_filter_by_date(self):
        transfers = [
            TransferRecord("veer", "Veer", "2026-10-18", "10:00", "Nedlands", [StockItem("Dal", 2)], 0),
            TransferRecord("veer", "Veer", "2026-10-19", "11:00", "Vic Park", [StockItem("Rice", 3)], 0),
        ]
        assert [t.to_location for t in transfers_on(transfers, "2026-10-19")] == ["Vic Park"]
