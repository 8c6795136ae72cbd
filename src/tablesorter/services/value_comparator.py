"""Cell value comparison for the sort engine.

Compares two raw cell strings under a resolved column type:

 - ``number``: decimal parse of both values, numeric order; text fallback.
 - ``date``: explicit token format first (``DD/MM/YYYY`` style), then a
   general calendar parse; text fallback when either side stays invalid.
 - ``text``: locale-aware collation, case-insensitive first.

Malformed input never raises; every path ends in a defined total order.
"""

from __future__ import annotations

import locale
import re
from datetime import date, datetime, timezone
from typing import Optional

from tablesorter.config.settings import FALLBACK_DATE_LAYOUTS, TWO_DIGIT_YEAR_PIVOT
from tablesorter.domain.models import ColumnType

__all__ = [
    "compare",
    "compare_text",
    "parse_number",
    "parse_date",
    "parse_date_with_format",
]

# Leading decimal plus an optional digit-free suffix ("5%", "9 km").
_NUMBER_PATTERN = re.compile(r"([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)\D*", re.ASCII)
_VALUE_SPLIT = re.compile(r"[^0-9]+")
_FORMAT_SPLIT = re.compile(r"[^A-Za-z]+")

_SECONDS_PER_DAY = 86400
# Days in years 0..3 of the proleptic calendar (year 0 is a leap year).
_DAYS_BEFORE_YEAR_4 = 1461


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def _clean(raw: Optional[str]) -> str:
    return "" if raw is None else str(raw).strip()


def parse_number(raw: Optional[str]) -> Optional[float]:
    """Parse a locale-agnostic decimal, ignoring a trailing unit such as ``%``.

    The suffix may not contain digits, so ``"2023-01-05"`` or ``"12:30"``
    are not read as numbers. Returns ``None`` when no number leads the value.
    """
    m = _NUMBER_PATTERN.fullmatch(_clean(raw))
    if not m:
        return None
    return float(m.group(1))


def _collate(a: str, b: str) -> int:
    try:
        return _sign(locale.strcoll(a, b))
    except ValueError:  # embedded NUL; collation is unavailable
        return (a > b) - (a < b)


def compare_text(a: str, b: str) -> int:
    return _collate(a.casefold(), b.casefold()) or _collate(a, b)


def _ordinal(year: int, month: int, day: int) -> Optional[int]:
    try:
        if year >= 1:
            return date(year, month, day).toordinal()
        if year == 0:
            return date(4, month, day).toordinal() - _DAYS_BEFORE_YEAR_4
    except ValueError:
        return None
    return None


def parse_date_with_format(raw: Optional[str], date_format: str) -> Optional[float]:
    """Parse ``raw`` against a token pattern such as ``DD/MM/YYYY``.

    Returns an instant in seconds, or ``None`` when the value does not fit
    the pattern (token count mismatch, non-integer token, invalid day).
    """
    fmt_tokens = [t for t in _FORMAT_SPLIT.split(date_format) if t]
    value_tokens = [t for t in _VALUE_SPLIT.split(_clean(raw)) if t]
    if not fmt_tokens or len(fmt_tokens) != len(value_tokens):
        return None
    year, month, day = 0, 1, 1
    for token, text in zip(fmt_tokens, value_tokens):
        try:
            number = int(text)
        except ValueError:
            return None
        token = token.upper()
        if token == "YYYY":
            year = number
        elif token == "YY":
            year = number + (2000 if number < TWO_DIGIT_YEAR_PIVOT else 1900)
        elif token in ("MM", "M"):
            month = number
        elif token in ("DD", "D"):
            day = number
    ordinal = _ordinal(year, month, day)
    if ordinal is None:
        return None
    return float(ordinal * _SECONDS_PER_DAY)


def _instant(dt: datetime) -> float:
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    seconds = dt.hour * 3600 + dt.minute * 60 + dt.second + dt.microsecond / 1_000_000
    return dt.toordinal() * _SECONDS_PER_DAY + seconds


def parse_date(raw: Optional[str]) -> Optional[float]:
    """General calendar-date parse returning an instant in seconds.

    Accepts ISO 8601 as read by ``datetime.fromisoformat`` on 3.11+ (basic
    forms like ``20230105`` and a trailing ``Z`` included) and the layouts
    in ``FALLBACK_DATE_LAYOUTS``. Returns ``None`` if nothing matches.
    """
    text = _clean(raw)
    if not text:
        return None
    iso = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return _instant(datetime.fromisoformat(iso))
    except (ValueError, OverflowError):
        pass
    for layout in FALLBACK_DATE_LAYOUTS:
        try:
            return _instant(datetime.strptime(text, layout))
        except (ValueError, OverflowError):
            continue
    return None


def _date_instant(raw: str, date_format: Optional[str]) -> Optional[float]:
    if date_format:
        instant = parse_date_with_format(raw, date_format)
        if instant is not None:
            return instant
    return parse_date(raw)


def compare(
    raw_a: Optional[str],
    raw_b: Optional[str],
    column_type: ColumnType,
    date_format: Optional[str] = None,
) -> int:
    """Order two raw cell values; returns -1, 0 or 1."""
    a = _clean(raw_a)
    b = _clean(raw_b)
    if column_type == ColumnType.NUMBER:
        num_a = parse_number(a)
        num_b = parse_number(b)
        if num_a is not None and num_b is not None:
            return _sign(num_a - num_b)
    elif column_type == ColumnType.DATE:
        inst_a = _date_instant(a, date_format)
        inst_b = _date_instant(b, date_format)
        if inst_a is not None and inst_b is not None:
            return _sign(inst_a - inst_b)
    return compare_text(a, b)

