"""Global configuration and constants for sort-state handling."""

from __future__ import annotations

import os
from typing import Final, Tuple

DATA_DIR: Final = os.environ.get("TABLESORTER_DATA_DIR", "data")

# Prefix of the per-table storage key; kept stable so saved state reloads.
STORAGE_KEY_PREFIX: Final = "sorter-sortOrders-"

# Two-digit years below the pivot land in the 2000s, the rest in the 1900s.
TWO_DIGIT_YEAR_PIVOT: Final = 70

# Layouts tried (after ISO 8601) when a date value has no explicit format.
FALLBACK_DATE_LAYOUTS: Final[Tuple[str, ...]] = (
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%a, %d %b %Y %H:%M:%S",
    "%a %b %d %Y",
)
