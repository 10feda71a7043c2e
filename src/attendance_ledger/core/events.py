"""Ledger events.

Events are published only after the operation's unit of work has committed,
so a rejected operation never reaches any subscriber.
"""
from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import asdict, dataclass
from typing import Callable, Deque, List, Optional

from .constants import DEFAULT_EVENT_LOG_SIZE

_log = logging.getLogger("attendance_ledger.events")


@dataclass(frozen=True)
class LedgerEvent:
    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        return {"event": self.name, **asdict(self)}


@dataclass(frozen=True)
class AdminAdded(LedgerEvent):
    identity: str


@dataclass(frozen=True)
class ProfessorAdded(LedgerEvent):
    identity: str


@dataclass(frozen=True)
class StudentAdded(LedgerEvent):
    identity: str


@dataclass(frozen=True)
class AttendanceGiven(LedgerEvent):
    recorder: str
    subject: str
    date_key: int
    time_slot: Optional[int] = None


EventHandler = Callable[[LedgerEvent], None]


class EventBus:
    """Synchronous fan-out to subscribers, in subscription order."""

    def __init__(self):
        self._handlers: List[EventHandler] = []

    def subscribe(self, handler: EventHandler) -> None:
        self._handlers.append(handler)

    def publish(self, event: LedgerEvent) -> None:
        for handler in list(self._handlers):
            handler(event)


class EventLog:
    """Bounded in-memory record of published events (newest last)."""

    def __init__(self, maxlen: int = DEFAULT_EVENT_LOG_SIZE):
        self._events: Deque[LedgerEvent] = deque(maxlen=int(maxlen))
        self._lock = threading.Lock()

    def __call__(self, event: LedgerEvent) -> None:
        with self._lock:
            self._events.append(event)

    def recent(self, limit: Optional[int] = None) -> List[LedgerEvent]:
        with self._lock:
            items = list(self._events)
        if limit is not None:
            items = items[-int(limit):] if limit > 0 else []
        return items

    def clear(self) -> None:
        with self._lock:
            self._events.clear()


def log_event(event: LedgerEvent) -> None:
    _log.info("%s %s", event.name, asdict(event))
