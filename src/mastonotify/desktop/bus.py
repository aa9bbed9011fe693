"""D-Bus session connection and freedesktop Notifications messages."""

from dbus_fast import BusType, Message, MessageType
from dbus_fast.aio import MessageBus

NOTIFICATIONS_SERVICE = "org.freedesktop.Notifications"
NOTIFICATIONS_PATH = "/org/freedesktop/Notifications"
NOTIFICATIONS_INTERFACE = "org.freedesktop.Notifications"

ACTION_INVOKED = "ActionInvoked"
NOTIFICATION_CLOSED = "NotificationClosed"


async def connect() -> MessageBus:
    """Connect to the session bus."""
    return await MessageBus(bus_type=BusType.SESSION).connect()


def notifications_call(member: str, signature: str, body: list) -> Message:
    """Build a method call on the notification service."""
    return Message(
        destination=NOTIFICATIONS_SERVICE,
        path=NOTIFICATIONS_PATH,
        interface=NOTIFICATIONS_INTERFACE,
        member=member,
        signature=signature,
        body=body,
    )


def signal_rule(member: str) -> str:
    """Match rule for one notification service signal."""
    return f"type='signal',interface='{NOTIFICATIONS_INTERFACE}',member='{member}'"


def _match_call(member: str, rule: str) -> Message:
    return Message(
        destination="org.freedesktop.DBus",
        path="/org/freedesktop/DBus",
        interface="org.freedesktop.DBus",
        member=member,
        signature="s",
        body=[rule],
    )


def add_match(rule: str) -> Message:
    """Build an AddMatch call so the bus routes matching signals to us."""
    return _match_call("AddMatch", rule)


def remove_match(rule: str) -> Message:
    return _match_call("RemoveMatch", rule)


def reply_error(reply: Message | None) -> str | None:
    """Describe an error reply, or return None for a successful one."""
    if reply is None:
        return "no reply"
    if reply.message_type == MessageType.ERROR:
        detail = reply.body[0] if reply.body else ""
        return f"{reply.error_name}: {detail}" if detail else str(reply.error_name)
    return None
