"""Sortable column registration.

Collects the per-column comparison settings for one table. Registration is
forgiving: a column whose index or forced type cannot be understood is
left out of the sortable set with a warning, and the rest of the table stays
sortable.

Index rules follow header markup conventions: no explicit index (``None`` or
``""``) means the column's own position; strings are read by their leading
integer (``"3"``, ``" 2px"`` -> 2).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Dict, Iterable, Iterator, List, Optional, Union

from tablesorter.domain.models import ColumnType, ColumnTypeConfig

__all__ = ["ColumnRegistry", "parse_column_index"]

_log = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_column_index(raw: Union[int, str, None], position: int) -> Optional[int]:
    """Resolve a declared column index; ``None`` when it is unusable."""
    if raw is None or (isinstance(raw, str) and raw == ""):
        index = position
    elif isinstance(raw, bool):
        return None
    elif isinstance(raw, int):
        index = raw
    elif isinstance(raw, str):
        m = _LEADING_INT.match(raw)
        if not m:
            return None
        index = int(m.group(1))
    else:
        return None
    return index if index >= 0 else None


def _coerce_type(raw: Union[ColumnType, str, None]) -> Optional[ColumnType]:
    if raw is None or isinstance(raw, ColumnType):
        return raw
    return ColumnType(raw.strip().lower())


class ColumnRegistry(Mapping):
    """Read-only mapping of sortable column index -> `ColumnTypeConfig`."""

    def __init__(self) -> None:
        self._configs: Dict[int, ColumnTypeConfig] = {}
        self._by_position: Dict[int, int] = {}

    def register(
        self,
        position: int,
        index: Union[int, str, None] = None,
        forced_type: Union[ColumnType, str, None] = None,
        date_format: Optional[str] = None,
    ) -> Optional[ColumnTypeConfig]:
        resolved = parse_column_index(index, position)
        if resolved is None:
            _log.warning("Invalid sort index %r for column %d; column not sortable", index, position)
            return None
        try:
            column_type = _coerce_type(forced_type)
        except (ValueError, AttributeError):
            _log.warning(
                "Unknown sort type %r for column %d; column not sortable", forced_type, position
            )
            return None
        if resolved in self._configs:
            _log.warning("Column index %d registered twice; keeping the first", resolved)
            return None
        config = ColumnTypeConfig(
            index=resolved,
            forced_type=column_type,
            date_format=date_format or None,
            position=position,
        )
        self._configs[resolved] = config
        self._by_position.setdefault(position, resolved)
        return config

    def register_all(self, count: int, exclude: Iterable[int] = ()) -> List[ColumnTypeConfig]:
        """Make every column position sortable except the opted-out ones."""
        skipped = set(exclude)
        out: List[ColumnTypeConfig] = []
        for position in range(count):
            if position in skipped:
                continue
            config = self.register(position)
            if config is not None:
                out.append(config)
        return out

    def config_for(self, index: int) -> Optional[ColumnTypeConfig]:
        return self._configs.get(index)

    def index_for_position(self, position: int) -> Optional[int]:
        """Sort index a header position was registered with, if any."""
        return self._by_position.get(position)

    def indices(self) -> List[int]:
        return sorted(self._configs)

    # Mapping protocol -------------------------------------------------
    def __getitem__(self, index: int) -> ColumnTypeConfig:
        return self._configs[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self.indices())

    def __len__(self) -> int:
        return len(self._configs)
