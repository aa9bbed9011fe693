"""Decode streaming frames into notifications.

A frame carries an envelope ``{"event": ..., "payload": ...}`` whose payload
is a second JSON document. Only ``notification`` events are decoded further;
every other event is filtered out without looking at its payload.
"""

from __future__ import annotations

import json

import aiohttp

from ..errors import EnvelopeError, PayloadError
from .models import Envelope, EventKind, Notification


def decode(frame: aiohttp.WSMessage) -> Notification | None:
    """Decode a websocket frame. Non-text frames are ignored."""
    if frame.type != aiohttp.WSMsgType.TEXT:
        return None
    return decode_text(frame.data)


def decode_text(text: str) -> Notification | None:
    """Decode one text frame.

    Returns None for events other than notifications.

    Raises:
        EnvelopeError: the envelope is not valid JSON or is missing fields
        PayloadError: the notification payload is malformed
    """
    try:
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        envelope = Envelope.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise EnvelopeError(f"malformed envelope: {e!r}") from e

    if envelope.event is not EventKind.NOTIFICATION:
        return None

    try:
        payload = json.loads(envelope.payload)
        if not isinstance(payload, dict):
            raise ValueError(f"expected an object, got {type(payload).__name__}")
        return Notification.from_dict(payload)
    except (KeyError, TypeError, ValueError) as e:
        raise PayloadError(f"malformed notification payload: {e!r}") from e
