"""Mastodon streaming feed connection and OAuth helpers."""

from __future__ import annotations

from collections.abc import AsyncIterator
from urllib.parse import urlencode

import aiohttp

from ..errors import TransportError
from ..log import get_logger

_log = get_logger("mastodon.client")

REDIRECT_URI = "urn:ietf:wg:oauth:2.0:oob"
SCOPES = "read"
GRANT_TYPE = "authorization_code"

# Seconds between websocket pings; a missed pong closes the connection
HEARTBEAT = 30.0


def login_url(host: str, client_id: str) -> str:
    """Build the URL where the user authorizes the app and gets a code."""
    query = urlencode(
        {
            "response_type": "code",
            "redirect_uri": REDIRECT_URI,
            "scope": SCOPES,
            "client_id": client_id,
        }
    )
    return f"https://{host}/oauth/authorize?{query}"


async def fetch_token(host: str, client_id: str, client_secret: str, code: str) -> str:
    """Exchange an authorization code for an access token."""
    request = {
        "client_id": client_id,
        "client_secret": client_secret,
        "code": code,
        "redirect_uri": REDIRECT_URI,
        "grant_type": GRANT_TYPE,
        "scope": SCOPES,
    }
    async with aiohttp.ClientSession() as session:
        async with session.post(f"https://{host}/oauth/token", json=request) as response:
            response.raise_for_status()
            data = await response.json()
    return data["access_token"]


class MastodonClient:
    """Connection to one account's user stream.

    Use as an async context manager so the HTTP session gets closed:

        async with MastodonClient(host, token) as client:
            async for frame in client.frames():
                ...
    """

    def __init__(self, host: str, token: str) -> None:
        self.host = host
        self._token = token
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> MastodonClient:
        self._session = aiohttp.ClientSession()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    @property
    def stream_url(self) -> str:
        return f"wss://{self.host}/api/v1/streaming"

    async def frames(self) -> AsyncIterator[aiohttp.WSMessage]:
        """Yield raw frames from the user stream.

        The stream never ends on its own: an error frame, a failed connection
        or the server closing the socket all raise TransportError.
        """
        if self._session is None:
            raise RuntimeError("MastodonClient must be used as an async context manager")

        try:
            async with self._session.ws_connect(
                self.stream_url,
                params={"stream": "user"},
                headers={"Authorization": f"Bearer {self._token}"},
                heartbeat=HEARTBEAT,
            ) as ws:
                _log.info("connected to %s", self.stream_url)
                async for frame in ws:
                    if frame.type == aiohttp.WSMsgType.ERROR:
                        raise TransportError(f"feed connection failed: {ws.exception()!r}")
                    yield frame
                close_code = ws.close_code
        except aiohttp.ClientError as e:
            raise TransportError(f"feed connection failed: {e!r}") from e

        raise TransportError(f"feed connection closed by server (code {close_code})")
