"""Pending notification store.

Remembers which notification-service id belongs to which Mastodon
notification, so a later click or close signal can be traced back to it.

An id leaves the store on the first of: a close signal, an action signal, or
expiry after ``timeout + grace``. ``remove`` pops under the lock, so however
those race, exactly one caller gets the notification back and every other
caller gets None.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field

from ..log import get_logger
from ..mastodon.models import Notification

_log = get_logger("desktop.store")

# Notification daemons may keep a notification on screen a little past its
# nominal timeout (milliseconds)
DEFAULT_GRACE_MS = 200


@dataclass(frozen=True)
class PendingEntry:
    id: int
    notification: Notification
    timeout: int  # milliseconds
    inserted_at: float = field(default_factory=time.monotonic)


class PendingStore:
    """Map of notification-service id -> PendingEntry, with expiry timers.

    The lock only guards single dict operations; it is never held while
    awaiting anything else.
    """

    def __init__(self, grace_ms: int = DEFAULT_GRACE_MS) -> None:
        self.grace_ms = grace_ms
        self._entries: dict[int, PendingEntry] = {}
        self._timers: dict[int, asyncio.Task] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, notification_id: object) -> bool:
        return notification_id in self._entries

    async def insert(self, notification_id: int, notification: Notification, timeout: int) -> None:
        """Add an entry. Ids should be unique; if one repeats, the last write wins."""
        async with self._lock:
            if notification_id in self._entries:
                _log.warning("id %d already pending, replacing it", notification_id)
            self._entries[notification_id] = PendingEntry(notification_id, notification, timeout)
            stale_timer = self._timers.pop(notification_id, None)

        if stale_timer is not None:
            stale_timer.cancel()

    async def remove(self, notification_id: int) -> Notification | None:
        """Remove an entry and return its notification, or None if it is gone."""
        async with self._lock:
            entry = self._entries.pop(notification_id, None)
            timer = self._timers.pop(notification_id, None)

        if timer is not None and timer is not asyncio.current_task():
            timer.cancel()

        return entry.notification if entry else None

    def schedule_expiry(self, notification_id: int, timeout: int) -> asyncio.Task:
        """Remove the entry after ``timeout + grace`` milliseconds.

        Runs as its own task; an earlier ``remove`` cancels it.
        """
        delay = (max(timeout, 0) + self.grace_ms) / 1000
        timer = asyncio.create_task(
            self._expire(notification_id, delay), name=f"expire-{notification_id}"
        )

        previous = self._timers.get(notification_id)
        if previous is not None:
            previous.cancel()
        self._timers[notification_id] = timer
        return timer

    async def _expire(self, notification_id: int, delay: float) -> None:
        await asyncio.sleep(delay)
        if await self.remove(notification_id) is not None:
            _log.debug("expired %d", notification_id)

    def cancel_timers(self) -> None:
        """Cancel every pending expiry timer (on shutdown)."""
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
