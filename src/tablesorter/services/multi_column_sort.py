"""Multi-column sorting engine.

Provides a stable multi-key sort for raw tabular rows. The `MultiColumnSorter`
accepts a list of rows (sequences of cell text) and orders them according to
a `SortSpecification`. Each key resolves its column type per comparison,
compares through the value comparator and is negated when descending; the
first non-zero key decides. Python's sort is stable, so rows that tie on
every key keep their original relative order.

An empty specification is the "unsorted" state: rows come back in their
original order.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Callable, Generic, Iterable, List, Mapping, Optional, Sequence, TypeVar

from tablesorter.domain.models import ColumnTypeConfig, SortSpecification
from .type_resolver import resolve_type
from .value_comparator import compare

__all__ = ["CellGetter", "MultiColumnSorter", "sequence_cell", "sort_rows"]

T = TypeVar("T")
CellGetter = Callable[[Any, int], Optional[str]]


def sequence_cell(row: Sequence[Optional[str]], index: int) -> Optional[str]:
    """Cell text for plain sequence rows; missing cells read as empty."""
    if 0 <= index < len(row):
        return row[index]
    return ""


class MultiColumnSorter(Generic[T]):
    """Utility to apply multi-key sorting in a stable manner.

    Usage:
        sorter = MultiColumnSorter(rows)
        rows_sorted = sorter.sort(
            SortSpecification.from_pairs([(7, False), (1, True)]),
            registry,
        )
    """

    def __init__(self, rows: Iterable[T], cell_getter: Optional[CellGetter] = None):
        self._rows: List[T] = list(rows)
        self._cell = cell_getter or sequence_cell

    def compare_rows(
        self,
        a: T,
        b: T,
        spec: SortSpecification,
        columns: Optional[Mapping[int, ColumnTypeConfig]] = None,
    ) -> int:
        for key in spec:
            config = columns.get(key.index) if columns is not None else None
            val_a = self._cell(a, key.index)
            val_b = self._cell(b, key.index)
            column_type = resolve_type(config, val_a, val_b)
            fmt = config.date_format if config is not None else None
            result = compare(val_a, val_b, column_type, fmt)
            if result != 0:
                return result if key.ascending else -result
        return 0

    def sort(
        self,
        spec: SortSpecification,
        columns: Optional[Mapping[int, ColumnTypeConfig]] = None,
    ) -> List[T]:
        result = list(self._rows)
        if spec.is_empty:
            return result
        result.sort(key=cmp_to_key(lambda a, b: self.compare_rows(a, b, spec, columns)))
        return result


def sort_rows(
    rows: Iterable[T],
    spec: SortSpecification,
    columns: Optional[Mapping[int, ColumnTypeConfig]] = None,
    cell_getter: Optional[CellGetter] = None,
) -> List[T]:
    return MultiColumnSorter(rows, cell_getter).sort(spec, columns)
