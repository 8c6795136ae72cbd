"""Column type resolution for a single comparison.

Forced types from configuration always win. Without one, the type is
inferred from the two values being compared: both numeric -> ``number``,
anything else -> ``date`` (the comparator degrades to text when the date
parse fails). The decision is made per comparison, never cached per column,
because later rows may parse differently than earlier ones.
"""

from __future__ import annotations

from typing import Optional

from tablesorter.domain.models import ColumnType, ColumnTypeConfig
from .value_comparator import parse_number

__all__ = ["resolve_type"]


def resolve_type(
    config: Optional[ColumnTypeConfig], value_a: Optional[str], value_b: Optional[str]
) -> ColumnType:
    if config is not None and config.forced_type is not None:
        return config.forced_type
    if parse_number(value_a) is not None and parse_number(value_b) is not None:
        return ColumnType.NUMBER
    return ColumnType.DATE
