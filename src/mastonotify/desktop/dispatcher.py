"""Send notifications to the desktop notification service."""

from __future__ import annotations

from dbus_fast import DBusError
from dbus_fast.aio import MessageBus

from .. import APP_NAME
from ..errors import DispatchError
from ..log import get_logger
from ..mastodon.models import Notification
from .bus import notifications_call, reply_error
from .store import PendingStore

_log = get_logger("desktop.dispatcher")

# (key, label) pairs; "default" is what a click on the notification body invokes
DEFAULT_ACTIONS = ["default", "default"]


class Dispatcher:
    """Shows notifications and records their ids in the pending store."""

    def __init__(self, bus: MessageBus, store: PendingStore, app_name: str = APP_NAME) -> None:
        self._bus = bus
        self.store = store
        self.app_name = app_name

    async def _call(self, member: str, signature: str, body: list) -> list:
        try:
            reply = await self._bus.call(notifications_call(member, signature, body))
        except (DBusError, ConnectionError, EOFError) as e:
            raise DispatchError(f"{member} failed: {e!r}") from e

        error = reply_error(reply)
        if error:
            raise DispatchError(f"{member} failed: {error}")
        return reply.body

    async def send(self, notification: Notification, icon: str, timeout: int) -> int:
        """Show a notification and remember it until it is closed or expires.

        Args:
            notification: the Mastodon notification to show
            icon: freedesktop icon name or path ("" for none)
            timeout: display timeout in milliseconds

        Returns:
            The id the notification service assigned.

        Raises:
            DispatchError: the service call failed; nothing is stored
        """
        body = [
            self.app_name,
            0,  # replaces_id: always a new notification
            icon,
            notification.summary(),
            notification.body(),
            DEFAULT_ACTIONS,
            {},
            timeout,
        ]
        (notification_id,) = await self._call("Notify", "susssasa{sv}i", body)

        await self.store.insert(notification_id, notification, timeout)
        self.store.schedule_expiry(notification_id, timeout)

        _log.info("sent %d: %s", notification_id, notification.summary())
        return notification_id

    async def close(self, notification_id: int) -> None:
        """Ask the service to close a notification.

        The store entry goes away when the resulting NotificationClosed
        signal reaches the correlator, not here.
        """
        await self._call("CloseNotification", "u", [notification_id])
