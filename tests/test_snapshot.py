"""Snapshot yeniden oluşturma unit testleri."""

from src.engine.snapshot import apply_entry, rebuild_snapshot
from src.models.stock import LogEntry, StockItem


def _entry(section, location, *items, staff="sapna"):
    return LogEntry(
        staff_id=staff,
        staff_name=staff.title(),
        section=section,
        location=location,
        items=[StockItem(name, qty) for name, qty in items],
        time="09:00",
        timestamp_millis=0,
    )


class TestRebuildSnapshot:
    def test_most_recent_date_wins(self):
        logs = {
            "2026-10-17": [_entry("Cool Room", "Vic Park", ("Dal", 5))],
            "2026-10-18": [_entry("Cool Room", "Vic Park", ("Dal", 1))],
        }
        snapshot = rebuild_snapshot(logs)
        assert snapshot["Vic Park"]["Cool Room"][0].quantity == 1

    def test_first_entry_of_day_wins(self):
        """Aynı gün iki kayıt varsa günün ilk kaydı snapshot'a girer."""
        logs = {
            "2026-10-18": [
                _entry("Cool Room", "Vic Park", ("Dal", 4)),
                _entry("Cool Room", "Vic Park", ("Dal", 9)),
            ],
        }
        snapshot = rebuild_snapshot(logs)
        assert snapshot["Vic Park"]["Cool Room"][0].quantity == 4

    def test_sections_and_locations_independent(self):
        logs = {
            "2026-10-17": [_entry("Freezer", "Nedlands", ("Okra", 3))],
            "2026-10-18": [_entry("Cool Room", "Vic Park", ("Dal", 1))],
        }
        snapshot = rebuild_snapshot(logs)
        assert set(snapshot) == {"Vic Park", "Nedlands"}
        assert list(snapshot["Nedlands"]) == ["Freezer"]
        assert list(snapshot["Vic Park"]) == ["Cool Room"]

    def test_absent_pairs_not_initialized(self):
        assert rebuild_snapshot({}) == {}

    def test_missing_location_and_section_use_defaults(self):
        logs = {"2026-10-18": [_entry("", "", ("Dal", 1))]}
        snapshot = rebuild_snapshot(logs)
        assert "General" in snapshot["Vic Park"]

    def test_idempotent(self):
        logs = {
            "2026-10-17": [_entry("Freezer", "Nedlands", ("Okra", 3))],
            "2026-10-18": [_entry("Cool Room", "Vic Park", ("Dal", 1)), _entry("Dairy", "Vic Park", ("Milk", 2))],
        }
        assert rebuild_snapshot(logs) == rebuild_snapshot(logs)


class TestApplyEntry:
    def test_replaces_pair_without_mutating(self):
        original = rebuild_snapshot({"2026-10-18": [_entry("Cool Room", "Vic Park", ("Dal", 4))]})
        updated = apply_entry(original, _entry("Cool Room", "Vic Park", ("Dal", 9)))
        assert updated["Vic Park"]["Cool Room"][0].quantity == 9
        assert original["Vic Park"]["Cool Room"][0].quantity == 4

    def test_adds_new_location(self):
        updated = apply_entry({}, _entry("Dairy", "Nedlands", ("Milk", 2)))
        assert updated == {"Nedlands": {"Dairy": [StockItem("Milk", 2)]}}
