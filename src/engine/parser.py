"""Serbest metin stok ayrıştırıcı.

Her satır `<isim><ayraç><değer>` biçimindeyse bir StockItem üretir.
Ayraç `:`, `-` veya `–` karakterlerinden bir ya da daha fazlasıdır.
Kalıba uymayan satırlar hata vermeden atlanır.
"""

from __future__ import annotations

import re

from src.models.stock import StockItem

_LINE_RE = re.compile(r"^(.+?)\s*[:\-–]+\s*(.+)$")
_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?|\.\d+")
_UNIT_RE = re.compile(
    r"(?<![a-z])(kg|litre|liter|lit|ltr|l|serve|pcs|pieces|box|bag|pack|bucket|tray|bunch|bottle)(?:e?s)?(?![a-z])",
    re.IGNORECASE,
)
_HALF_RE = re.compile(r"and\s*half|½|&\s*half", re.IGNORECASE)
_LESS_THAN_RE = re.compile(r"less\s*than", re.IGNORECASE)


def parse_quantity(rest: str) -> float:
    """Değer metnindeki ilk sayıyı ve kesir ifadelerini miktara çevirir."""
    match = _NUMBER_RE.search(rest)
    quantity = float(match.group(0)) if match else 0.0
    if _HALF_RE.search(rest):
        quantity += 0.5
    if _LESS_THAN_RE.search(rest):
        quantity = max(0.0, quantity - 0.5)
    return quantity


def parse_unit(rest: str) -> str:
    match = _UNIT_RE.search(rest)
    return match.group(1) if match else ""


def parse_line(line: str) -> StockItem | None:
    match = _LINE_RE.match(line.strip())
    if not match:
        return None
    name = match.group(1).strip()
    rest = match.group(2).strip()
    if not name or not rest:
        return None
    return StockItem(name=name, quantity=parse_quantity(rest), unit=parse_unit(rest), raw_text=rest)


def parse_stock(text: str) -> list[StockItem]:
    """Yapıştırılan metni satır sırasıyla StockItem listesine çevirir."""
    items: list[StockItem] = []
    for line in (text or "").splitlines():
        if not line.strip():
            continue
        item = parse_line(line)
        if item is not None:
            items.append(item)
    return items
