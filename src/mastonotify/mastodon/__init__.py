"""Mastodon integration: streaming feed, wire models, token storage."""

from .decode import decode, decode_text
from .models import Account, Envelope, EventKind, Notification, NotificationKind, Status

__all__ = [
    "Account",
    "Envelope",
    "EventKind",
    "Notification",
    "NotificationKind",
    "Status",
    "decode",
    "decode_text",
]
