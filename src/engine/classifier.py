"""Anahtar kelime tabanlı bölüm ve lokasyon tespiti.

Kurallar tanımlandıkları sırayla denenir, ilk eşleşen kazanır.
"""

from __future__ import annotations

import re
from typing import Optional

SECTION_RULES: list[tuple[re.Pattern, str]] = [
    (re.compile(r"kot\s*(section|stock|fridge)", re.IGNORECASE), "KOT Section"),
    (re.compile(r"cool\s*room", re.IGNORECASE), "Cool Room"),
    (re.compile(r"freezer", re.IGNORECASE), "Freezer"),
    (re.compile(r"dry\s*(store|storage)", re.IGNORECASE), "Dry Store"),
    (re.compile(r"vegetable", re.IGNORECASE), "Vegetables"),
    (re.compile(r"dairy", re.IGNORECASE), "Dairy"),
    (re.compile(r"drink", re.IGNORECASE), "Drinks"),
    (re.compile(r"tandoor|grill|tikka", re.IGNORECASE), "Tandoor/Grill"),
    (re.compile(r"marinat", re.IGNORECASE), "Marination"),
    (re.compile(r"meat|seafood|fridge\s*stock", re.IGNORECASE), "Meat & Seafood"),
]

LOCATION_RULES: list[tuple[re.Pattern, str]] = [
    (re.compile(r"nedlands", re.IGNORECASE), "Nedlands"),
    (re.compile(r"vic\s*park|victoria", re.IGNORECASE), "Vic Park"),
]


def _first_match(rules: list[tuple[re.Pattern, str]], text: str) -> Optional[str]:
    for pattern, name in rules:
        if pattern.search(text or ""):
            return name
    return None


def detect_section(text: str) -> Optional[str]:
    """Mesajın ait olduğu stok bölümünü döndürür, bulunamazsa None."""
    return _first_match(SECTION_RULES, text)


def detect_location(text: str) -> Optional[str]:
    """Mesajın ait olduğu şubeyi döndürür, bulunamazsa None."""
    return _first_match(LOCATION_RULES, text)
