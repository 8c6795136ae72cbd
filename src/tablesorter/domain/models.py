"""Domain models for multi-column sort state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple


class ColumnType(str, Enum):  # str subclass so values serialise directly
    NUMBER = "number"
    TEXT = "text"
    DATE = "date"


class HeaderSortState(str, Enum):
    NONE = "none"
    ASCENDING = "ascending"
    DESCENDING = "descending"


@dataclass(frozen=True, slots=True)
class SortKey:
    index: int
    ascending: bool = True

    def __post_init__(self):
        if isinstance(self.index, bool) or not isinstance(self.index, int) or self.index < 0:
            raise ValueError(f"SortKey index must be a non-negative int, got {self.index!r}")

    def flipped(self) -> "SortKey":
        return SortKey(self.index, not self.ascending)


@dataclass(frozen=True, slots=True)
class ColumnTypeConfig:
    """Per-column comparison settings, fixed at registration.

    Attributes:
        index: Logical column position used by sort keys.
        forced_type: When set, comparisons always use this type and type
            inference is skipped.
        date_format: Optional token pattern (``YYYY``, ``YY``, ``MM``/``M``,
            ``DD``/``D``) used for ``date`` comparisons.
        position: Header position the column was declared at, when it came
            from registration (may differ from ``index``).
    """

    index: int
    forced_type: Optional[ColumnType] = None
    date_format: Optional[str] = None
    position: Optional[int] = None


class SortSpecification:
    """Ordered, immutable list of active sort keys (first = primary).

    An empty specification means "unsorted": rows keep their original order.
    Column indices are unique within a specification.
    """

    __slots__ = ("_keys",)

    def __init__(self, keys: Iterable[SortKey] = ()):
        keys = tuple(keys)
        seen = set()
        for k in keys:
            if k.index in seen:
                raise ValueError(f"duplicate sort key for column {k.index}")
            seen.add(k.index)
        self._keys: Tuple[SortKey, ...] = keys

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[int, bool]]) -> "SortSpecification":
        return cls(SortKey(index, ascending) for index, ascending in pairs)

    @property
    def keys(self) -> Tuple[SortKey, ...]:
        return self._keys

    @property
    def is_empty(self) -> bool:
        return not self._keys

    def indices(self) -> List[int]:
        return [k.index for k in self._keys]

    def position_of(self, index: int) -> Optional[int]:
        for pos, k in enumerate(self._keys):
            if k.index == index:
                return pos
        return None

    def key_for(self, index: int) -> Optional[SortKey]:
        pos = self.position_of(index)
        return None if pos is None else self._keys[pos]

    def as_pairs(self) -> List[Tuple[int, bool]]:
        return [(k.index, k.ascending) for k in self._keys]

    def __iter__(self) -> Iterator[SortKey]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __getitem__(self, pos: int) -> SortKey:
        return self._keys[pos]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SortSpecification):
            return NotImplemented
        return self._keys == other._keys

    def __hash__(self) -> int:
        return hash(self._keys)

    def __repr__(self) -> str:
        inner = ", ".join(f"{k.index}:{'asc' if k.ascending else 'desc'}" for k in self._keys)
        return f"SortSpecification([{inner}])"


__all__ = [
    "ColumnType",
    "HeaderSortState",
    "SortKey",
    "ColumnTypeConfig",
    "SortSpecification",
]
