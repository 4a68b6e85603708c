"""
Flyover Seen Set
Remembers which aircraft have already triggered a notification.
"""

import logging
import time
from collections import OrderedDict
from typing import Callable, Hashable, Optional

from ..config import Settings

logger = logging.getLogger("flyover.tracking.seen")


class SeenSet:
    """
    Bounded set of notified aircraft identifiers.

    Entries are kept in last-touched order. Once ``max_size`` is exceeded
    the stalest entry is evicted. With ``forget_after_seconds`` set, an
    identifier that has not been touched (observed in range) for that long
    is dropped by ``expire()``, so the aircraft is reported again when it
    comes back. Without it, identifiers are only ever dropped by eviction.

    Not thread-safe; only the detection loop uses it.
    """

    def __init__(
        self,
        max_size: int = Settings.SEEN_MAX_SIZE,
        forget_after_seconds: Optional[float] = Settings.SEEN_FORGET_AFTER_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self.max_size = max_size
        self.forget_after_seconds = forget_after_seconds
        self._clock = clock
        self._entries: "OrderedDict[Hashable, float]" = OrderedDict()
        self.evicted_count = 0

    def __contains__(self, flight_id: Hashable) -> bool:
        return flight_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def has_seen(self, flight_id: Hashable) -> bool:
        return flight_id in self._entries

    def mark_seen(self, flight_id: Hashable) -> None:
        """Record an identifier; re-marking refreshes its position."""
        self._entries[flight_id] = self._clock()
        self._entries.move_to_end(flight_id)

        while len(self._entries) > self.max_size:
            oldest, _ = self._entries.popitem(last=False)
            self.evicted_count += 1
            logger.debug("Evicted %s from seen set (size limit %d)", oldest, self.max_size)

    def touch(self, flight_id: Hashable) -> None:
        """Refresh an already seen identifier that is still in range."""
        if flight_id in self._entries:
            self._entries[flight_id] = self._clock()
            self._entries.move_to_end(flight_id)

    def expire(self) -> int:
        """
        Forget identifiers not touched within the forget window.

        Returns:
            Number of identifiers removed
        """
        if self.forget_after_seconds is None:
            return 0

        cutoff = self._clock() - self.forget_after_seconds
        removed = 0
        # Entries are ordered by last touch, so stop at the first fresh one
        while self._entries:
            flight_id, last_seen = next(iter(self._entries.items()))
            if last_seen > cutoff:
                break
            del self._entries[flight_id]
            removed += 1

        if removed:
            logger.debug("Forgot %d aircraft no longer in range", removed)
        return removed
