"""Per-table sort state holder.

`TableSortController` owns the sort specification of one table and wires the
pure pieces together: selection -> `apply_selection` -> event -> save. Hosts
create one controller per table, keyed by a caller-chosen ``table_id``;
re-initialising a table means discarding the controller and creating a new
one.

Persistence problems never interrupt sorting. They are logged, published on
the event bus (when one is attached) and the in-memory state carries on.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, TypeVar

from tablesorter.domain.models import SortSpecification
from .column_registry import ColumnRegistry
from .event_bus import EventBus, SortEvent
from .multi_column_sort import CellGetter, sort_rows
from .settings_service import SettingsService
from .sort_specification import HeaderState, apply_selection, header_states
from .sort_state_persistence import LoadStatus, SortStateStore, deserialize, serialize

__all__ = ["TableSortController"]

_log = logging.getLogger(__name__)

T = TypeVar("T")


class TableSortController:
    def __init__(
        self,
        table_id: str,
        columns: ColumnRegistry,
        store: Optional[SortStateStore] = None,
        bus: Optional[EventBus] = None,
        settings: Optional[SettingsService] = None,
    ):
        self.table_id = table_id
        self.columns = columns
        self._store = store
        self._bus = bus
        self._settings = settings or SettingsService.instance
        self._spec = SortSpecification()

    # Properties -------------------------------------------------------
    @property
    def spec(self) -> SortSpecification:
        return self._spec

    @property
    def storage_key(self) -> str:
        return self._settings.storage_key(self.table_id)

    def _persistence_enabled(self) -> bool:
        return self._store is not None and self._settings.persist_sort_state

    def _publish(self, name: SortEvent, **payload) -> None:
        if self._bus is not None:
            self._bus.publish(name, {"table_id": self.table_id, **payload})

    # Lifecycle --------------------------------------------------------
    def restore(self) -> LoadStatus:
        """Replace the current specification with the saved one, if usable."""
        if not self._persistence_enabled():
            return LoadStatus.ABSENT
        try:
            raw = self._store.load(self.storage_key)  # type: ignore[union-attr]
        except Exception as exc:  # noqa: BLE001 - store failures are non-fatal
            _log.warning("Failed to read sort state for %s: %s", self.table_id, exc)
            self._spec = SortSpecification()
            self._publish(SortEvent.SORT_STATE_LOAD_FAILED, error=str(exc))
            return LoadStatus.UNREADABLE
        result = deserialize(raw, self.columns.indices())
        self._spec = result.spec
        if result.status is LoadStatus.INVALID:
            _log.warning("Ignoring malformed sort state for %s", self.table_id)
        elif result.status is LoadStatus.EMPTY:
            _log.info("Saved sort state for %s had no usable entries", self.table_id)
        if result.restored:
            self._publish(SortEvent.SORT_STATE_RESTORED, spec=self._spec.as_pairs())
        return result.status

    def save(self) -> bool:
        if not self._persistence_enabled():
            return False
        try:
            ok = bool(self._store.save(self.storage_key, serialize(self._spec)))  # type: ignore[union-attr]
            error = None if ok else "store rejected write"
        except Exception as exc:  # noqa: BLE001 - store failures are non-fatal
            ok, error = False, str(exc)
        if not ok:
            _log.warning("Failed to save sort state for %s: %s", self.table_id, error)
            self._publish(SortEvent.SORT_STATE_SAVE_FAILED, error=error)
        return ok

    # Selection --------------------------------------------------------
    def select(self, column_index: int, extend: bool = False) -> bool:
        """Apply a header selection; returns False when the column is not sortable."""
        if (
            isinstance(column_index, bool)
            or not isinstance(column_index, int)
            or column_index not in self.columns
        ):
            _log.debug("Ignoring selection of unsortable column %r", column_index)
            return False
        self._spec = apply_selection(self._spec, column_index, extend)
        self._publish(SortEvent.SORT_CHANGED, spec=self._spec.as_pairs())
        self.save()
        return True

    # Queries ----------------------------------------------------------
    def sort_rows(self, rows: Iterable[T], cell_getter: Optional[CellGetter] = None) -> List[T]:
        return sort_rows(rows, self._spec, self.columns, cell_getter)

    def header_states(self) -> Dict[int, HeaderState]:
        return header_states(self._spec, self.columns.indices())
