"""Synchronous event bus for sort-state notifications.

Hosts subscribe to learn when a table's sort changed (to re-render rows and
header state) or when persistence failed (to surface diagnostics). One
failing handler does not stop delivery to the others; failures are kept in
`EventBus.errors`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Dict, List, Protocol

__all__ = ["SortEvent", "Event", "EventBus", "EventHandler", "Subscription"]


class SortEvent(str, Enum):
    SORT_CHANGED = "sort_changed"
    SORT_STATE_RESTORED = "sort_state_restored"
    SORT_STATE_LOAD_FAILED = "sort_state_load_failed"
    SORT_STATE_SAVE_FAILED = "sort_state_save_failed"


@dataclass
class Event:
    name: str
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _key(name: str | SortEvent) -> str:
    return name.value if isinstance(name, SortEvent) else name


class EventBus:
    """Publish/subscribe dispatcher.

    Handlers run outside the lock (subscribers are snapshotted first), so a
    handler may subscribe or unsubscribe without deadlocking.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []

    def subscribe(
        self, name: str | SortEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_key(name), handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event, [])
            self._subs[sub.event] = [s for s in bucket if s is not sub]
            if not self._subs[sub.event]:
                self._subs.pop(sub.event, None)
        sub.active = False

    def publish(self, name: str | SortEvent, payload: Any = None) -> Event:
        key = _key(name)
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(key, ()))
        finished: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                with self._lock:
                    self._errors.append((evt, exc))
            else:
                if sub.once:
                    finished.append(sub)
        for sub in finished:
            self.unsubscribe(sub)
        return evt

    def subscriber_count(self, name: str | SortEvent) -> int:
        with self._lock:
            return len(self._subs.get(_key(name), ()))

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)
