"""Sort specification transitions for header selections.

A plain selection makes the chosen column the only key (toggling its
direction when it already is the only key). An extended selection (Shift)
adds the column as the lowest-precedence key, or toggles it in place when it
is already active. Functions here are pure and return new specifications;
re-sorting and saving are the caller's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from tablesorter.domain.models import HeaderSortState, SortKey, SortSpecification

__all__ = ["HeaderState", "apply_selection", "header_states"]


@dataclass(frozen=True)
class HeaderState:
    state: HeaderSortState = HeaderSortState.NONE
    rank: Optional[int] = None  # 1-based precedence when active


def apply_selection(
    spec: SortSpecification, column_index: int, extend: bool = False
) -> SortSpecification:
    keys = list(spec.keys)
    existing = spec.position_of(column_index)
    if not extend:
        if len(keys) == 1 and existing == 0:
            return SortSpecification([keys[0].flipped()])
        return SortSpecification([SortKey(column_index, True)])
    if existing is None:
        keys.append(SortKey(column_index, True))
    else:
        keys[existing] = keys[existing].flipped()
    return SortSpecification(keys)


def header_states(spec: SortSpecification, indices: Iterable[int]) -> Dict[int, HeaderState]:
    """Tri-state (none / ascending / descending) per column for rendering."""
    out: Dict[int, HeaderState] = {}
    for index in indices:
        pos = spec.position_of(index)
        if pos is None:
            out[index] = HeaderState()
            continue
        key = spec[pos]
        state = HeaderSortState.ASCENDING if key.ascending else HeaderSortState.DESCENDING
        out[index] = HeaderState(state=state, rank=pos + 1)
    return out
