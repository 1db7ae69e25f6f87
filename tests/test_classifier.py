"""Bölüm ve lokasyon tespiti unit testleri."""

import pytest

from src.engine.classifier import detect_location, detect_section


class TestDetectSection:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("KOT section update", "KOT Section"),
            ("kot fridge", "KOT Section"),
            ("Cool Room update:", "Cool Room"),
            ("coolroom", "Cool Room"),
            ("Freezer count", "Freezer"),
            ("dry storage", "Dry Store"),
            ("Vegetables today", "Vegetables"),
            ("dairy", "Dairy"),
            ("Drinks fridge", "Drinks"),
            ("Paneer Tikka: 3", "Tandoor/Grill"),
            ("marination tubs", "Marination"),
            ("seafood", "Meat & Seafood"),
            ("fridge stock", "Meat & Seafood"),
        ],
    )
    def test_keywords(self, text, expected):
        assert detect_section(text) == expected

    def test_first_rule_wins(self):
        # "kot fridge" ve "freezer" birlikte: KOT kuralı önce tanımlı
        assert detect_section("KOT fridge and freezer") == "KOT Section"
        assert detect_section("cool room and freezer") == "Cool Room"

    def test_no_match(self):
        assert detect_section("Sambar: 25") is None
        assert detect_section("") is None


class TestDetectLocation:
    def test_nedlands(self):
        assert detect_location("Sent to NEDLANDS") == "Nedlands"

    def test_vic_park_variants(self):
        assert detect_location("vic park cool room") == "Vic Park"
        assert detect_location("vicpark") == "Vic Park"
        assert detect_location("Victoria") == "Vic Park"

    def test_nedlands_checked_first(self):
        assert detect_location("from vic park to nedlands") == "Nedlands"

    def test_no_match(self):
        assert detect_location("Dal: 1") is None
