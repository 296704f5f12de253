from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

_NON_NUMERIC_RE = re.compile(r"[^\d-]")
_LEADING_INT_RE = re.compile(r"^-?\d+")
_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")
_DOT_DATE_RE = re.compile(r"^(\d{1,2})\.(\d{1,2})\.(\d{4})")
_SLASH_DATE_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})")

FALLBACK_DATE_FORMATS = (
    "%Y/%m/%d",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%b %d %Y",
)


def safe_parse_int(value: Optional[str]) -> int:
    """Parse spreadsheet numbers such as "1 500 000" or "$1,200"; anything unusable is 0."""
    if not value:
        return 0
    cleaned = _NON_NUMERIC_RE.sub("", str(value))
    match = _LEADING_INT_RE.match(cleaned)
    if not match:
        return 0
    return int(match.group(0))


def _build_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_sheet_date(value: Optional[str]) -> Optional[date]:
    """Parse the date formats seen in the sales sheets.

    Slash dates are ambiguous: "03/04/2024" is read month-first. Only a
    leading part above 12 switches to day-first.
    """
    if not value:
        return None
    value = value.strip()
    if not value:
        return None

    iso_match = _ISO_DATE_RE.match(value)
    if iso_match:
        year, month, day = (int(part) for part in iso_match.groups())
        return _build_date(year, month, day)

    dot_match = _DOT_DATE_RE.match(value)
    if dot_match:
        day, month, year = (int(part) for part in dot_match.groups())
        return _build_date(year, month, day)

    slash_match = _SLASH_DATE_RE.match(value)
    if slash_match:
        first, second, year = (int(part) for part in slash_match.groups())
        if first > 12:
            return _build_date(year, second, first)
        return _build_date(year, first, second)

    return _parse_generic_date(value)


def _parse_generic_date(value: str) -> Optional[date]:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for fmt in FALLBACK_DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None
