from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, Tuple

# (window key, lookback in days), shortest first. "today" holds only rows dated
# on the anchor; the longer windows take every row dated on or after their start,
# so a future-dated row lands in week and up but not in today.
ROLLING_WINDOWS: Tuple[Tuple[str, int], ...] = (
    ("today", 0),
    ("week", 7),
    ("month", 30),
    ("six_months", 180),
    ("year", 365),
)
WINDOW_KEYS: Tuple[str, ...] = tuple(key for key, _ in ROLLING_WINDOWS)


def rolling_window_starts(anchor: date) -> Dict[str, date]:
    return {key: anchor - timedelta(days=days) for key, days in ROLLING_WINDOWS}


def windows_containing(row_date: date, starts: Dict[str, date]) -> list[str]:
    return [
        key
        for key in WINDOW_KEYS
        if (row_date == starts[key] if key == "today" else starts[key] <= row_date)
    ]
