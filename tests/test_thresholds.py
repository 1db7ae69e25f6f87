"""Düşük stok eşik değerlendirmesi unit testleri."""

import pytest

from src.engine.thresholds import (
    ConfigurationError,
    check_low_stock,
    evaluate_item,
    threshold_for,
    validate_thresholds,
)
from src.models.stock import Severity, StockItem


def _item(name, quantity, unit=""):
    return StockItem(name=name, quantity=quantity, unit=unit, raw_text=str(quantity))


class TestCheckLowStock:
    def test_zero_quantity_is_critical(self):
        flagged = check_low_stock([_item("X", 0)], {"default": 2})
        assert len(flagged) == 1
        assert flagged[0].severity == Severity.CRITICAL
        assert flagged[0].threshold == 2

    def test_equal_to_threshold_is_warning(self):
        flagged = check_low_stock([_item("Sambar", 10)], {"default": 2, "Sambar": 10})
        assert len(flagged) == 1
        assert flagged[0].severity == Severity.WARNING
        assert flagged[0].threshold == 10

    def test_above_threshold_not_flagged(self):
        assert check_low_stock([_item("Sambar", 11)], {"default": 2, "Sambar": 10}) == []

    def test_input_order_preserved(self):
        items = [_item("A", 1), _item("B", 0), _item("C", 5), _item("D", 2)]
        flagged = check_low_stock(items, {"default": 2})
        assert [f.name for f in flagged] == ["A", "B", "D"]
        assert [f.severity for f in flagged] == [Severity.WARNING, Severity.CRITICAL, Severity.WARNING]

    def test_flagged_item_keeps_original_fields(self):
        flagged = check_low_stock([_item("Milk", 1.5, "litre")], {"default": 2})
        assert flagged[0].unit == "litre"
        assert flagged[0].quantity == 1.5
        assert flagged[0].raw_text == "1.5"

    def test_deterministic(self):
        items = [_item("A", 1), _item("B", 0)]
        thresholds = {"default": 2}
        assert check_low_stock(items, thresholds) == check_low_stock(items, thresholds)


class TestThresholdLookup:
    def test_specific_zero_threshold_used(self):
        assert threshold_for("Salt", {"default": 2, "Salt": 0}) == 0
        assert evaluate_item(_item("Salt", 1), {"default": 2, "Salt": 0}) is None

    def test_missing_default_treated_as_zero(self):
        assert threshold_for("Anything", {}) == 0
        assert evaluate_item(_item("Anything", 0), {}).severity == Severity.CRITICAL


class TestValidateThresholds:
    def test_valid_table(self):
        validate_thresholds({"default": 2, "Sambar": 10, "Milk": 1.5})

    def test_missing_default_raises(self):
        with pytest.raises(ConfigurationError):
            validate_thresholds({"Sambar": 10})

    def test_negative_raises(self):
        with pytest.raises(ConfigurationError):
            validate_thresholds({"default": 2, "Sambar": -1})

    def test_non_number_raises(self):
        with pytest.raises(ConfigurationError):
            validate_thresholds({"default": "2"})
        with pytest.raises(ConfigurationError):
            validate_thresholds({"default": True})

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_raises(self, value):
        with pytest.raises(ConfigurationError):
            validate_thresholds({"default": 2, "Dal": value})

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)
