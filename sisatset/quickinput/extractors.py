"""Field extractors for quick-input lines.

Every extractor is total: a fragment that does not match, or that matches
but cannot be turned into a valid value, yields ``None`` instead of raising.
"""

from __future__ import annotations

import re
from datetime import date
from typing import TYPE_CHECKING, Iterable

from .categories import SHOPPING_CATEGORY_KEYWORDS, SHOPPING_UNITS

if TYPE_CHECKING:
    from .models import KnownEntity

# 26/10/2025, 5-3-25, 1/11
_DATE_PATTERN = re.compile(
    r"(?<!\d)(\d{1,2})[/-](\d{1,2})(?:[/-](\d{4}|\d{2}))?(?!\d)"
)

# Literal H:MM, ranges are not validated (e.g. "99:99" is kept as-is)
_TIME_PATTERN = re.compile(r"\d{1,2}:\d{2}")

# Schedule hours: "07.00", "7:00", "07-12"
_HOURS_PATTERN = re.compile(r"\d{1,2}[:.-]\d{2}")

_QTY_PATTERN = re.compile(
    r"(\d+)\s*(" + "|".join(SHOPPING_UNITS) + r")",
    re.IGNORECASE,
)

# "Rp.35000", "rp 12.500", "Rp15,000"
_PRICE_PATTERN = re.compile(r"rp\.?\s?([\d.,]+)", re.IGNORECASE)

_BULLET_PATTERN = re.compile(r"^[-*•]\s*")


def extract_date(line: str, fallback_year: int) -> str | None:
    """Extract the first valid day/month[/year] date as an ISO string.

    Two-digit years are read as 20xx. When the year is missing,
    *fallback_year* is used.

    Returns:
        "YYYY-MM-DD", or None if the line holds no valid date.
    """
    for m in _DATE_PATTERN.finditer(line):
        day, month, year = m.group(1), m.group(2), m.group(3)
        if year is None:
            full_year = fallback_year
        elif len(year) == 2:
            full_year = 2000 + int(year)
        else:
            full_year = int(year)

        try:
            return date(full_year, int(month), int(day)).isoformat()
        except ValueError:
            continue
    return None


def extract_time(line: str) -> str | None:
    """Return the first ``H:MM`` substring verbatim."""
    m = _TIME_PATTERN.search(line)
    return m.group(0) if m else None


def has_hours(line: str) -> bool:
    """Check whether a line carries a clock-like range such as ``07.00``."""
    return _HOURS_PATTERN.search(line) is not None


def extract_category(line: str, categories: Iterable[str]) -> str | None:
    """Return the first category label contained in the line (case-insensitive)."""
    lower = line.lower()
    for category in categories:
        if category.lower() in lower:
            return category
    return None


def extract_entity(line: str, entities: Iterable[KnownEntity]) -> str | None:
    """Return the id of the first known entity whose name appears in the line."""
    lower = line.lower()
    for entity in entities:
        name = entity.name.strip().lower()
        if name and name in lower:
            return entity.id
    return None


def extract_marker(line: str, markers: Iterable[str]) -> str | None:
    """Return the value after the first ``:`` if the line contains a marker.

    Markers are matched case-insensitively anywhere in the line. A line
    with a marker but nothing after the colon yields an empty string.
    """
    lower = line.lower()
    if not any(marker in lower for marker in markers):
        return None
    _, sep, rest = line.partition(":")
    return rest.strip() if sep else ""


def extract_quantity(line: str) -> str | None:
    """Return the first ``<number><unit>`` fragment, e.g. "1kg" or "2 liter"."""
    m = _QTY_PATTERN.search(line)
    return m.group(0) if m else None


def extract_price(line: str) -> tuple[int, str] | None:
    """Parse an ``Rp`` price.

    Returns:
        (amount, matched_text) tuple. Thousand separators are stripped
        before parsing. None if no price with digits is present.
    """
    m = _PRICE_PATTERN.search(line)
    if not m:
        return None
    digits = re.sub(r"[.,]", "", m.group(1))
    if not digits:
        return None
    return (int(digits), m.group(0))


def guess_shopping_category(name: str) -> str | None:
    """Guess a shopping category from keywords in the item name."""
    lower = name.lower()
    for category, keywords in SHOPPING_CATEGORY_KEYWORDS.items():
        for keyword in keywords:
            if keyword in lower:
                return category
    return None


def strip_bullet(line: str) -> str:
    """Remove a leading ``-``, ``*`` or ``•`` list marker."""
    return _BULLET_PATTERN.sub("", line, count=1)
