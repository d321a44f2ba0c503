"""
Per-key cooldown bookkeeping for Sentinel Notifier.

Remembers when each key (alert category, or a constant for single-slot
notifiers) last had a message delivered, and answers whether a new
message for that key falls inside the cooldown window.

Implementation
--------------
* A plain dict ``key -> unix timestamp`` held in process memory; nothing
  is persisted, so a restart forgets all history.
* Only successful deliveries are recorded. A failed send leaves the
  previous timestamp (or no timestamp) in place.
* Not thread-safe on its own: the owning notifier serialises access.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Hashable

import structlog

logger = structlog.get_logger()

DEFAULT_COOLDOWN_S = 180.0


class CooldownThrottle:
    """Fixed-window suppression keyed by an arbitrary hashable.

    Args:
        cooldown_s: Seconds after a recorded send during which the same key
                    is suppressed.
        clock: Zero-argument callable returning the current unix time.
    """

    def __init__(
        self,
        *,
        cooldown_s: float = DEFAULT_COOLDOWN_S,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if cooldown_s <= 0:
            raise ValueError("cooldown_s must be positive")
        self.cooldown_s = cooldown_s
        self._clock = clock
        self._last_sent: dict[Hashable, float] = {}

    def now(self) -> float:
        """Return the current time according to the configured clock."""
        return self._clock()

    def last_sent(self, key: Hashable) -> float | None:
        """Return the last successful send time for *key*, if any."""
        return self._last_sent.get(key)

    def is_suppressed(self, key: Hashable) -> bool:
        """Return ``True`` while *key* is inside its cooldown window.

        The window is half-open: exactly ``cooldown_s`` after the last
        send the key is admitted again.
        """
        last = self._last_sent.get(key)
        if last is None:
            return False
        return self.now() - last < self.cooldown_s

    def record(self, key: Hashable) -> float:
        """Mark *key* as delivered now and return the recorded time."""
        sent_at = self.now()
        self._last_sent[key] = sent_at
        return sent_at

    def reset(self) -> None:
        """Forget every recorded send."""
        self._last_sent.clear()
