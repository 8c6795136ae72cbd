"""tablesorter public API.

Small curated surface for hosts that want multi-column, persisted row
ordering without importing deep module paths. The Qt presentation adapter
lives in ``tablesorter.views`` and is not imported here so headless callers
never pull in PyQt6.
"""

from .domain.models import (  # noqa: F401
    ColumnType,
    ColumnTypeConfig,
    HeaderSortState,
    SortKey,
    SortSpecification,
)
from .services.column_registry import ColumnRegistry  # noqa: F401
from .services.multi_column_sort import MultiColumnSorter, sort_rows  # noqa: F401
from .services.sort_specification import apply_selection, header_states  # noqa: F401
from .services.sort_state_persistence import (  # noqa: F401
    LoadStatus,
    deserialize,
    serialize,
)
from .services.table_sort_controller import TableSortController  # noqa: F401
from .services.value_comparator import compare  # noqa: F401

__all__ = [
    "ColumnType",
    "ColumnTypeConfig",
    "HeaderSortState",
    "SortKey",
    "SortSpecification",
    "ColumnRegistry",
    "MultiColumnSorter",
    "sort_rows",
    "apply_selection",
    "header_states",
    "LoadStatus",
    "serialize",
    "deserialize",
    "TableSortController",
    "compare",
]
