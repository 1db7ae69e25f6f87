from src.engine.catalog import StockConfig
from src.engine.classifier import detect_location, detect_section
from src.engine.parser import parse_stock
from src.engine.router import generate_response
from src.engine.snapshot import apply_entry, rebuild_snapshot
from src.engine.thresholds import ConfigurationError, check_low_stock, validate_thresholds

__all__ = [
    "ConfigurationError",
    "StockConfig",
    "apply_entry",
    "check_low_stock",
    "detect_location",
    "detect_section",
    "generate_response",
    "parse_stock",
    "rebuild_snapshot",
    "validate_thresholds",
]
