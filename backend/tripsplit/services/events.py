"""In-process change notifications: subscribers are called with the id of the trip that changed."""
import logging
from collections import defaultdict
from typing import Callable

logger = logging.getLogger(__name__)

ROSTER_CHANGED = "roster_changed"
EXPENSES_CHANGED = "expenses_changed"
TRIP_CHANGED = "trip_changed"

Subscriber = Callable[[str], None]


class EventBus:
    def __init__(self):
        self._subscribers: dict[str, list[Subscriber]] = defaultdict(list)

    def subscribe(self, topic: str, callback: Subscriber) -> None:
        if callback not in self._subscribers[topic]:
            self._subscribers[topic].append(callback)

    def unsubscribe(self, topic: str, callback: Subscriber) -> None:
        if callback in self._subscribers[topic]:
            self._subscribers[topic].remove(callback)

    def publish(self, topic: str, trip_id: str) -> None:
        for callback in list(self._subscribers[topic]):
            try:
                callback(trip_id)
            except Exception:
                # Delivery continues past a failing subscriber.
                logger.exception("Subscriber %r failed on %s for trip %s", callback, topic, trip_id)


event_bus = EventBus()
