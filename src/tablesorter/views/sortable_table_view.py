"""SortableTableView

QTableWidget-based presentation adapter. Holds raw string rows, delegates
every ordering decision to a `TableSortController` and re-renders rows plus
header indicators after each selection. A plain header click sorts by that
column; Shift+click adds or toggles a secondary key.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QApplication,
    QHeaderView,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from tablesorter.domain.models import HeaderSortState
from tablesorter.services.table_sort_controller import TableSortController

__all__ = ["SortableTableView", "header_label"]

_ARROWS = {HeaderSortState.ASCENDING: "▲", HeaderSortState.DESCENDING: "▼"}


def header_label(title: str, state: HeaderSortState, rank: Optional[int], key_count: int) -> str:
    arrow = _ARROWS.get(state)
    if arrow is None:
        return title
    if key_count > 1 and rank is not None:
        return f"{title} {arrow}{rank}"
    return f"{title} {arrow}"


class SortableTableView(QWidget):
    def __init__(
        self,
        controller: TableSortController,
        headers: Sequence[str],
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self.controller = controller
        self._headers: List[str] = list(headers)
        self._rows: List[List[str]] = []
        self._build_ui()

    def _build_ui(self):
        root = QVBoxLayout(self)
        self.table = QTableWidget(0, len(self._headers))
        self.table.setObjectName("sortableTable")
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        header.setStretchLastSection(True)
        header.setSectionsClickable(True)
        header.sectionClicked.connect(self._on_header_clicked)  # type: ignore
        root.addWidget(self.table)
        self._refresh_headers()

    def set_rows(self, rows: Sequence[Sequence[str]]):
        self._rows = [list(r) for r in rows]
        self._populate()

    def restore_sort(self):
        """Load persisted sort state for this table and re-render."""
        status = self.controller.restore()
        self._populate()
        return status

    def _populate(self):
        display_rows = self.controller.sort_rows(self._rows)
        self.table.setRowCount(len(display_rows))
        for r, row in enumerate(display_rows):
            for c in range(self.table.columnCount()):
                text = row[c] if c < len(row) else ""
                self.table.setItem(r, c, QTableWidgetItem(text))
        self._refresh_headers()

    def _refresh_headers(self):
        states = self.controller.header_states()
        key_count = len(self.controller.spec)
        labels: List[str] = []
        for c, title in enumerate(self._headers):
            index = self.controller.columns.index_for_position(c)
            hs = None if index is None else states.get(index)
            if hs is None:
                labels.append(title)
            else:
                labels.append(header_label(title, hs.state, hs.rank, key_count))
        self.table.setHorizontalHeaderLabels(labels)

    def _on_header_clicked(self, logical_index: int):  # pragma: no cover - UI callback
        modifiers = QApplication.keyboardModifiers()
        extend = bool(modifiers & Qt.KeyboardModifier.ShiftModifier)
        self.apply_selection(logical_index, extend)

    def apply_selection(self, header_position: int, extend: bool = False) -> bool:
        """Programmatic equivalent of a header click (Shift when ``extend``).

        The header position is mapped to the sort index the column was
        registered with; unregistered headers are ignored.
        """
        column_index = self.controller.columns.index_for_position(header_position)
        if column_index is None:
            return False
        changed = self.controller.select(column_index, extend)
        if changed:
            self._populate()
        return changed

    # Testing / export helpers ------------------------------------------
    def displayed_rows(self) -> List[List[str]]:
        data: List[List[str]] = []
        for r in range(self.table.rowCount()):
            row_vals: List[str] = []
            for c in range(self.table.columnCount()):
                item = self.table.item(r, c)
                row_vals.append(item.text() if item else "")
            data.append(row_vals)
        return data

    def header_labels(self) -> List[str]:
        out: List[str] = []
        for c in range(self.table.columnCount()):
            item = self.table.horizontalHeaderItem(c)
            out.append(item.text() if item else "")
        return out
