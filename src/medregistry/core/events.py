from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Literal, Union

from .roles import Role

_LOGGER = logging.getLogger(__name__)

EventType = Literal["EntityRegistered", "HospitalVerified"]


@dataclass(frozen=True, kw_only=True)
class EventBase:
    """A committed state change, in commit order.

    `seq` starts at 1 and increases by one per event in a given log.
    """

    type: EventType
    seq: int
    address: str
    created_at: float = field(default_factory=time.time)


@dataclass(frozen=True, kw_only=True)
class EntityRegistered(EventBase):
    type: Literal["EntityRegistered"] = "EntityRegistered"
    role: Role
    display_name: str


@dataclass(frozen=True, kw_only=True)
class HospitalVerified(EventBase):
    type: Literal["HospitalVerified"] = "HospitalVerified"
    verified: bool


Event = Union[EntityRegistered, HospitalVerified]
Subscriber = Callable[[Event], None]


class EventLog:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._events: list[Event] = []
        self._subscribers: list[Subscriber] = []

    def revision(self) -> int:
        with self._lock:
            return len(self._events)

    def entity_registered(self, address: str, role: Role, display_name: str) -> EntityRegistered:
        with self._lock:
            ev = EntityRegistered(
                seq=len(self._events) + 1,
                address=address,
                role=role,
                display_name=display_name,
            )
            self._append_locked(ev)
            return ev

    def hospital_verified(self, address: str, verified: bool) -> HospitalVerified:
        with self._lock:
            ev = HospitalVerified(seq=len(self._events) + 1, address=address, verified=bool(verified))
            self._append_locked(ev)
            return ev

    def _append_locked(self, event: Event) -> None:
        self._events.append(event)
        _LOGGER.debug("event #%d %s %s", event.seq, event.type, event.address)
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                # The state change is already committed; keep notifying the rest.
                _LOGGER.exception("event subscriber %r failed on event #%d", callback, event.seq)

    def since(self, seq: int = 0) -> list[Event]:
        """Return events with `seq` strictly greater than the given one."""

        start = max(0, int(seq))
        with self._lock:
            return list(self._events[start:])

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a push observer. Returns a function that unsubscribes it."""

        with self._lock:
            self._subscribers.append(callback)

        def _unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return _unsubscribe
