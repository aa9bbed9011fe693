"""Wire models for the Mastodon streaming API."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

import html2text

# Line width for plain-text rendering of status content
PLAIN_TEXT_WIDTH = 20


def _str_field(data: dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"{key!r} must be a string, got {type(value).__name__}")
    return value


def _optional_str_field(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{key!r} must be a string or null, got {type(value).__name__}")
    return value


def _object_field(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data[key]
    if not isinstance(value, dict):
        raise ValueError(f"{key!r} must be an object, got {type(value).__name__}")
    return value


class NotificationKind(enum.Enum):
    MENTION = "mention"
    FOLLOW = "follow"
    REBLOG = "reblog"
    FAVOURITE = "favourite"
    STATUS = "status"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str) -> NotificationKind:
        """Map a wire value onto a kind. Unknown values become OTHER."""
        try:
            return cls(value.lower())
        except ValueError:
            return cls.OTHER


# Kinds that carry a status worth linking to
_STATUS_KINDS = frozenset(
    {
        NotificationKind.MENTION,
        NotificationKind.REBLOG,
        NotificationKind.FAVOURITE,
        NotificationKind.STATUS,
    }
)

_SUMMARIES = {
    NotificationKind.MENTION: "{name} mentioned you",
    NotificationKind.FOLLOW: "Follow",
    NotificationKind.REBLOG: "{name} boosted your status",
    NotificationKind.FAVOURITE: "{name} favourited your status",
    NotificationKind.STATUS: "{name} just posted",
}


class EventKind(enum.Enum):
    NOTIFICATION = "notification"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str) -> EventKind:
        if value.lower() == cls.NOTIFICATION.value:
            return cls.NOTIFICATION
        return cls.OTHER


@dataclass(frozen=True)
class Account:
    id: str
    username: str
    display_name: str
    acct: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Account:
        return cls(
            id=_str_field(data, "id"),
            username=_str_field(data, "username"),
            display_name=_str_field(data, "display_name"),
            acct=_str_field(data, "acct"),
        )

    @property
    def name(self) -> str:
        """Display name, falling back to the username when it is empty."""
        return self.display_name or self.username


@dataclass(frozen=True)
class Status:
    id: str
    url: str
    account: Account
    content: str  # HTML
    reblog: Status | None = None
    in_reply_to_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Status:
        reblog = data.get("reblog")
        if reblog is not None and not isinstance(reblog, dict):
            raise ValueError(f"'reblog' must be an object or null, got {type(reblog).__name__}")

        return cls(
            id=_str_field(data, "id"),
            url=_str_field(data, "url"),
            account=Account.from_dict(_object_field(data, "account")),
            content=_str_field(data, "content"),
            reblog=cls.from_dict(reblog) if reblog is not None else None,
            in_reply_to_id=_optional_str_field(data, "in_reply_to_id"),
        )

    def plain_content(self) -> str:
        """Render the HTML content as wrapped plain text."""
        converter = html2text.HTML2Text(bodywidth=PLAIN_TEXT_WIDTH)
        converter.ignore_links = True
        converter.ignore_images = True
        converter.ignore_emphasis = True
        return converter.handle(self.content).strip()


@dataclass(frozen=True)
class Notification:
    """A decoded feed notification."""

    account: Account
    kind: NotificationKind
    status: Status | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Notification:
        status = data.get("status")
        if status is not None and not isinstance(status, dict):
            raise ValueError(f"'status' must be an object or null, got {type(status).__name__}")

        return cls(
            account=Account.from_dict(_object_field(data, "account")),
            kind=NotificationKind.parse(_str_field(data, "type")),
            status=Status.from_dict(status) if status is not None else None,
        )

    def summary(self) -> str:
        """Short title for the desktop notification."""
        template = _SUMMARIES.get(self.kind, "")
        return template.format(name=self.account.name)

    def body(self) -> str:
        """Longer text for the desktop notification."""
        if self.kind in _STATUS_KINDS:
            return self.status.plain_content() if self.status else ""
        if self.kind is NotificationKind.FOLLOW:
            return f"{self.account.name} is now following you"
        return ""

    def url(self) -> str | None:
        """Link to open when the notification is clicked, if any."""
        if self.kind in _STATUS_KINDS and self.status:
            return self.status.url
        return None


@dataclass(frozen=True)
class Envelope:
    """Outer stream message. The payload is itself JSON, decoded separately."""

    event: EventKind
    payload: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Envelope:
        # some events (e.g. filters_changed) are sent without a payload
        payload = data.get("payload", "")
        if not isinstance(payload, str):
            raise ValueError(f"'payload' must be a string, got {type(payload).__name__}")
        return cls(event=EventKind.parse(_str_field(data, "event")), payload=payload)
