"""Sort state persistence.

Serialises a `SortSpecification` to the stable wire format

    [{"index": 2, "asc": false}, {"index": 0, "asc": true}]

and validates it on the way back in. Loading never raises: malformed input
yields an empty specification plus a `LoadStatus` telling "nothing saved"
apart from "saved but unusable".

Stores only move strings keyed by a storage key:
 - `InMemorySortStateStore`: dict-backed, for tests and short-lived hosts.
 - `JsonFileSortStateStore`: one JSON file per key inside the user data dir.

Store failures are non-fatal for callers: `save` returns False, `load` raises
``OSError`` for unreadable files and the controller reports it.
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Collection, Dict, List, Optional, Protocol

from tablesorter.domain.models import SortKey, SortSpecification

__all__ = [
    "LoadStatus",
    "SortStateLoadResult",
    "SortStateStore",
    "InMemorySortStateStore",
    "JsonFileSortStateStore",
    "serialize",
    "deserialize",
]

_log = logging.getLogger(__name__)


class LoadStatus(str, Enum):
    LOADED = "loaded"  # at least one valid entry restored
    ABSENT = "absent"  # nothing stored under the key
    EMPTY = "empty"  # stored, but every entry was dropped
    INVALID = "invalid"  # stored value is not a JSON array
    UNREADABLE = "unreadable"  # the store itself failed


@dataclass(frozen=True)
class SortStateLoadResult:
    spec: SortSpecification
    status: LoadStatus
    dropped: int = 0

    @property
    def restored(self) -> bool:
        return self.status is LoadStatus.LOADED


class SortStateStore(Protocol):  # pragma: no cover - structural
    def load(self, key: str) -> Optional[str]: ...

    def save(self, key: str, raw: str) -> bool: ...


def serialize(spec: SortSpecification) -> str:
    payload = [{"index": k.index, "asc": k.ascending} for k in spec]
    return json.dumps(payload, separators=(",", ":"))


def _valid_entry(entry: Any) -> bool:
    if not isinstance(entry, dict):
        return False
    index = entry.get("index")
    if isinstance(index, bool) or not isinstance(index, int) or index < 0:
        return False
    return isinstance(entry.get("asc"), bool)


def deserialize(raw: Optional[str], valid_indices: Collection[int]) -> SortStateLoadResult:
    """Parse and validate a stored specification; never raises."""
    if raw is None:
        return SortStateLoadResult(SortSpecification(), LoadStatus.ABSENT)
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        _log.debug("Stored sort state is not valid JSON: %.60r", raw)
        return SortStateLoadResult(SortSpecification(), LoadStatus.INVALID)
    if not isinstance(data, list):
        return SortStateLoadResult(SortSpecification(), LoadStatus.INVALID)
    allowed = set(valid_indices)
    keys: List[SortKey] = []
    seen = set()
    for entry in data:
        if not _valid_entry(entry):
            continue
        index = entry["index"]
        if index in seen or index not in allowed:
            continue
        seen.add(index)
        keys.append(SortKey(index, entry["asc"]))
    dropped = len(data) - len(keys)
    if dropped:
        _log.debug("Dropped %d stored sort entries", dropped)
    if not keys:
        return SortStateLoadResult(SortSpecification(), LoadStatus.EMPTY, dropped)
    return SortStateLoadResult(SortSpecification(keys), LoadStatus.LOADED, dropped)


class InMemorySortStateStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def save(self, key: str, raw: str) -> bool:
        self._data[key] = raw
        return True

    def remove(self, key: str) -> bool:
        return self._data.pop(key, None) is not None


_SANITIZE_PATTERN = re.compile(r"[^\w\s-]")
_WS_PATTERN = re.compile(r"[-\s]+")


def _file_stem(key: str) -> str:
    cleaned = _WS_PATTERN.sub("_", _SANITIZE_PATTERN.sub("", key).strip())
    digest = hashlib.sha1(key.encode("utf-8")).hexdigest()[:8]
    return f"{cleaned[:60]}_{digest}"


class JsonFileSortStateStore:
    def __init__(self, base_dir: str):
        self.base_dir = base_dir

    def _path_for(self, key: str) -> str:
        return os.path.join(self.base_dir, f"{_file_stem(key)}.json")

    def load(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def save(self, key: str, raw: str) -> bool:
        path = self._path_for(key)
        try:
            os.makedirs(self.base_dir, exist_ok=True)
            tmp = path + ".tmp"
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(raw)
            os.replace(tmp, path)
            return True
        except OSError as exc:
            _log.warning("Failed to write sort state %s: %s", path, exc)
            return False

    def remove(self, key: str) -> bool:
        path = self._path_for(key)
        if not os.path.exists(path):
            return False
        try:
            os.remove(path)
            return True
        except OSError:
            return False
