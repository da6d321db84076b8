"""Cache-aside store for each trip's payer names, keyed by trip id."""
import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class RosterCache:
    def __init__(self):
        self._names: dict[str, list[str]] = {}
        # Bumped on every invalidation; a load only lands if its generation is still current.
        self._generations: dict[str, int] = {}
        self._epoch = 0
        self._lock = threading.Lock()

    def _generation(self, trip_id: str) -> tuple[int, int]:
        return self._epoch, self._generations.get(trip_id, 0)

    def get(self, trip_id: str) -> Optional[list[str]]:
        with self._lock:
            names = self._names.get(trip_id)
            return list(names) if names is not None else None

    def set(self, trip_id: str, names: list[str]) -> None:
        with self._lock:
            self._names[trip_id] = list(names)

    def get_or_load(self, trip_id: str, loader: Callable[[], list[str]]) -> list[str]:
        """Return cached names for ``trip_id``, calling ``loader`` and caching its result on a miss.

        A result loaded while the trip was invalidated is returned but not cached.
        """
        with self._lock:
            names = self._names.get(trip_id)
            if names is not None:
                return list(names)
            generation = self._generation(trip_id)
        names = list(loader())
        logger.debug("Roster cache miss for trip %s (%d names)", trip_id, len(names))
        with self._lock:
            if self._generation(trip_id) == generation:
                self._names[trip_id] = list(names)
            else:
                logger.debug("Roster for trip %s changed during load; not cached", trip_id)
        return names

    def invalidate(self, trip_id: str) -> None:
        with self._lock:
            self._names.pop(trip_id, None)
            self._generations[trip_id] = self._generations.get(trip_id, 0) + 1

    def clear(self) -> None:
        with self._lock:
            self._names.clear()
            self._generations.clear()
            self._epoch += 1


roster_cache = RosterCache()
