"""Service layer exports.

Responsibilities:
 - Value comparison and per-comparison type resolution
 - Sort specification transitions and the stable multi-key sort
 - Column registration, sort state persistence and the per-table controller
 - EventBus publish/subscribe for host notifications
"""

from .event_bus import EventBus, SortEvent  # noqa: F401
from .table_sort_controller import TableSortController  # noqa: F401

__all__ = [
    "EventBus",
    "SortEvent",
    "TableSortController",
]
