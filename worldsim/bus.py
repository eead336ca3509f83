"""Publish/subscribe hub for simulation events."""

import functools
import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional

from worldsim.events import Event, EventEnvelope


class EventSubscriber(ABC):
    """Receives envelopes of the event types it subscribed to."""

    @abstractmethod
    async def on_event(self, event: EventEnvelope) -> None:
        """Handle an envelope delivered by the bus."""


class EventBus:
    """Routes events to subscribers by event type."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[EventSubscriber]] = {}
        self._lock = threading.Lock()
        self._history: Optional[Callable[[EventEnvelope], object]] = None

    def connect_to_history(self, sink: Callable[[EventEnvelope], object]) -> None:
        """Send every published envelope to ``sink`` as well."""
        self._history = sink

    def subscribe(self, event_type: str, subscriber: EventSubscriber) -> None:
        """Register ``subscriber`` for events of ``event_type``."""
        with self._lock:
            self._subscribers.setdefault(event_type, []).append(subscriber)

    async def publish(self, event: Event) -> EventEnvelope:
        """Wrap ``event`` in an envelope, record it and notify subscribers."""
        envelope = EventEnvelope(event.event_type, "system", event.to_payload())
        if self._history is not None:
            self._history(envelope)
        await self._notify(envelope)
        return envelope

    async def publish_envelope(self, envelope: EventEnvelope) -> None:
        """Deliver an existing envelope to subscribers without recording it."""
        await self._notify(envelope)

    def subscriber_count(self, event_type: str) -> int:
        """Number of subscribers for ``event_type``."""
        with self._lock:
            return len(self._subscribers.get(event_type, ()))

    async def _notify(self, envelope: EventEnvelope) -> None:
        with self._lock:
            subscribers = list(self._subscribers.get(envelope.event_type, ()))
        for subscriber in subscribers:
            await subscriber.on_event(envelope)


@functools.lru_cache(maxsize=None)
def get_event_bus() -> EventBus:
    """The process-wide shared bus."""
    return EventBus()