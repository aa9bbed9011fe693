"""Test helpers: a fake session bus and wire-format builders."""

from __future__ import annotations

import json
from types import SimpleNamespace

import aiohttp
from dbus_fast import Message, MessageType

from mastonotify.desktop.bus import NOTIFICATIONS_INTERFACE, NOTIFICATIONS_PATH


class FakeBus:
    """Stands in for dbus_fast.aio.MessageBus.

    Notify replies hand out increasing ids starting at 1. Members listed in
    ``errors`` get an error reply instead.
    """

    def __init__(self) -> None:
        self.calls: list[Message] = []
        self.handlers: list = []
        self.errors: dict[str, str] = {}
        self._next_id = 1

    async def call(self, message: Message):
        self.calls.append(message)
        if message.member in self.errors:
            return SimpleNamespace(
                message_type=MessageType.ERROR,
                error_name=self.errors[message.member],
                body=["boom"],
            )
        if message.member == "Notify":
            notification_id = self._next_id
            self._next_id += 1
            return SimpleNamespace(message_type=MessageType.METHOD_RETURN, body=[notification_id])
        return SimpleNamespace(message_type=MessageType.METHOD_RETURN, body=[])

    def add_message_handler(self, handler) -> None:
        self.handlers.append(handler)

    def remove_message_handler(self, handler) -> None:
        self.handlers.remove(handler)

    def emit(self, member: str, signature: str, body: list) -> None:
        """Deliver a signal from the notification service to every handler."""
        message = Message.new_signal(
            NOTIFICATIONS_PATH, NOTIFICATIONS_INTERFACE, member, signature, body
        )
        for handler in list(self.handlers):
            handler(message)

    def calls_to(self, member: str) -> list[Message]:
        return [m for m in self.calls if m.member == member]


def account_dict(username: str = "alice", display_name: str = "") -> dict:
    return {
        "id": "1",
        "username": username,
        "display_name": display_name,
        "acct": f"{username}@example.social",
    }


def status_dict(url: str = "https://x/1", content: str = "<p>hi</p>", **extra) -> dict:
    return {
        "id": "100",
        "url": url,
        "account": account_dict("bob"),
        "content": content,
        "reblog": None,
        "in_reply_to_id": None,
        **extra,
    }


def notification_dict(kind: str = "mention", status: dict | None = None, **account) -> dict:
    return {"account": account_dict(**account), "type": kind, "status": status}


def envelope_text(event: str, payload) -> str:
    if not isinstance(payload, str):
        payload = json.dumps(payload)
    return json.dumps({"event": event, "payload": payload})


def text_frame(text: str) -> aiohttp.WSMessage:
    return aiohttp.WSMessage(aiohttp.WSMsgType.TEXT, text, None)
