from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Protocol

logger = logging.getLogger(__name__)

Subscriber = Callable[[str, dict], None]


class EventPublisher(Protocol):
    """Outbound notifications (attendance-changed, absentees-marked, salary-generated).

    Delivery and broadcast belong to the relay behind this interface.
    """

    def publish(self, event_name: str, payload: dict[str, Any]) -> None:
        raise NotImplementedError


class LoggingEventPublisher(EventPublisher):
    def publish(self, event_name: str, payload: dict[str, Any]) -> None:
        logger.info("event %s %s", event_name, payload)


class InMemoryEventPublisher(EventPublisher):
    """Keeps every published event and fans it out to local subscribers."""

    def __init__(self):
        self._lock = threading.Lock()
        self._subscribers: list[Subscriber] = []
        self.events: list[tuple[str, dict]] = []

    def subscribe(self, callback: Subscriber) -> None:
        with self._lock:
            self._subscribers.append(callback)

    def publish(self, event_name: str, payload: dict[str, Any]) -> None:
        with self._lock:
            self.events.append((event_name, dict(payload)))
            subscribers = list(self._subscribers)

        for callback in subscribers:
            try:
                callback(event_name, payload)
            except Exception:
                logger.exception("Subscriber failed for event %s", event_name)

    def named(self, event_name: str) -> list[dict]:
        with self._lock:
            return [p for name, p in self.events if name == event_name]
