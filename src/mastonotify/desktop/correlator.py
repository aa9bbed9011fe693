"""Map notification-service signals back to pending notifications.

The service reports what happened to a notification through two signals:
ActionInvoked(id, action_key) when the user clicks it and
NotificationClosed(id, reason) when it goes away for any reason. Each is
looked up in the pending store; the store's remove-once guarantee means a
notification produces at most one ActionResult, whichever signal (or the
expiry timer) gets there first.
"""

from __future__ import annotations

import asyncio
import enum
from collections.abc import AsyncIterator
from dataclasses import dataclass

from dbus_fast import DBusError, Message, MessageType
from dbus_fast.aio import MessageBus

from ..errors import SubscriptionError
from ..log import get_logger
from ..mastodon.models import Notification
from .bus import (
    ACTION_INVOKED,
    NOTIFICATION_CLOSED,
    NOTIFICATIONS_INTERFACE,
    add_match,
    remove_match,
    reply_error,
    signal_rule,
)
from .store import PendingStore

_log = get_logger("desktop.correlator")


class CloseReason(enum.IntEnum):
    EXPIRED = 1
    DISMISSED = 2
    CLOSED_BY_CALL = 3
    UNDEFINED = 4


@dataclass(frozen=True)
class Closed:
    notification: Notification
    reason: int

    @property
    def close_reason(self) -> CloseReason | None:
        try:
            return CloseReason(self.reason)
        except ValueError:
            return None


@dataclass(frozen=True)
class Invoked:
    notification: Notification
    action: str


ActionResult = Closed | Invoked

# member -> expected body signature
_SIGNALS = {
    ACTION_INVOKED: "us",
    NOTIFICATION_CLOSED: "uu",
}


def _is_notification_signal(message: Message) -> bool:
    return (
        message.message_type == MessageType.SIGNAL
        and message.interface == NOTIFICATIONS_INTERFACE
        and _SIGNALS.get(message.member) == message.signature
    )


class ActionCorrelator:
    """Turns notification-service signals into ActionResults.

    Call subscribe() once, then iterate actions(). Signals that arrive
    between the two are queued, not lost.
    """

    def __init__(self, bus: MessageBus, store: PendingStore) -> None:
        self._bus = bus
        self.store = store
        self._queue: asyncio.Queue[Message] | None = None

    async def subscribe(self) -> None:
        """Ask the bus for our two signals and start queueing them.

        Raises:
            SubscriptionError: the bus refused a match rule
        """
        if self._queue is not None:
            return

        for member in _SIGNALS:
            try:
                reply = await self._bus.call(add_match(signal_rule(member)))
            except (DBusError, ConnectionError, EOFError) as e:
                raise SubscriptionError(f"could not subscribe to {member}: {e!r}") from e
            error = reply_error(reply)
            if error:
                raise SubscriptionError(f"could not subscribe to {member}: {error}")

        self._queue = asyncio.Queue()
        self._bus.add_message_handler(self._on_message)
        _log.info("subscribed to %s", ", ".join(_SIGNALS))

    async def unsubscribe(self) -> None:
        """Stop queueing signals and drop our match rules from the bus."""
        if self._queue is None:
            return
        self._bus.remove_message_handler(self._on_message)
        self._queue = None

        for member in _SIGNALS:
            try:
                reply = await self._bus.call(remove_match(signal_rule(member)))
            except (DBusError, ConnectionError, EOFError) as e:
                _log.warning("could not unsubscribe from %s: %r", member, e)
                continue
            error = reply_error(reply)
            if error:
                _log.warning("could not unsubscribe from %s: %s", member, error)

    def _on_message(self, message: Message) -> None:
        # called by the bus for every incoming message; must not block
        if self._queue is not None and _is_notification_signal(message):
            self._queue.put_nowait(message)

    async def correlate(self, message: Message) -> ActionResult | None:
        """Look up a signal's notification; None if it is already gone."""
        notification_id, detail = message.body
        notification = await self.store.remove(notification_id)
        if notification is None:
            _log.debug("%s for unknown id %d, ignoring", message.member, notification_id)
            return None

        if message.member == ACTION_INVOKED:
            return Invoked(notification, detail)
        return Closed(notification, detail)

    async def actions(self) -> AsyncIterator[ActionResult]:
        """Yield an ActionResult for each signal that matches a pending notification."""
        if self._queue is None:
            raise SubscriptionError("actions() called before subscribe()")

        queue = self._queue
        while True:
            message = await queue.get()
            result = await self.correlate(message)
            if result is not None:
                yield result
