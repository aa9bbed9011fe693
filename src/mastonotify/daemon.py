"""The notification bridge daemon.

Two pipelines run side by side for the life of the process:

- inbound: feed frame -> decode -> Dispatcher.send (in feed order)
- outbound: correlator ActionResult -> open the status link on click

They share nothing but the pending store.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterable, Callable
from contextlib import suppress

import aiohttp
from dbus_fast import AuthError, DBusError

from .config import Config
from .desktop import bus
from .desktop.correlator import ActionCorrelator, ActionResult, Invoked
from .desktop.dispatcher import Dispatcher
from .desktop.store import PendingStore
from .errors import DecodeError, DispatchError, SubscriptionError
from .handlers import open_link
from .log import get_logger
from .mastodon.auth import wait_for_token
from .mastodon.client import MastodonClient
from .mastodon.decode import decode

_log = get_logger("daemon")


class Bridge:
    """Runs the inbound and outbound pipelines.

    Args:
        dispatcher: shows notifications and records them in the store
        correlator: yields ActionResults for signals on stored notifications
        open_link: called with a status url when a notification is clicked
        icon: icon for every notification
        timeout: display timeout in milliseconds
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        correlator: ActionCorrelator,
        open_link: Callable[[str], bool],
        icon: str = "",
        timeout: int = 5000,
    ) -> None:
        self.dispatcher = dispatcher
        self.correlator = correlator
        self.open_link = open_link
        self.icon = icon
        self.timeout = timeout

    async def forward(self, frames: AsyncIterable[aiohttp.WSMessage]) -> None:
        """Inbound pipeline. Bad items are skipped; TransportError propagates."""
        async for frame in frames:
            try:
                notification = decode(frame)
            except DecodeError as e:
                _log.warning("skipping frame: %s", e)
                continue

            if notification is None:
                continue

            try:
                await self.dispatcher.send(notification, self.icon, self.timeout)
            except DispatchError as e:
                _log.error("could not show notification: %s", e)

    async def react(self, results: AsyncIterable[ActionResult]) -> None:
        """Outbound pipeline: open the link of clicked notifications."""
        async for result in results:
            if not isinstance(result, Invoked):
                _log.debug("closed (reason %d): %s", result.reason, result.notification.summary())
                continue

            url = result.notification.url()
            if url is None:
                continue

            # best effort: a failed open never ends the pipeline
            try:
                await asyncio.to_thread(self.open_link, url)
            except Exception:
                _log.exception("could not open %s", url)

    async def run(self, frames: AsyncIterable[aiohttp.WSMessage]) -> None:
        """Run both pipelines until the feed ends.

        Raises:
            SubscriptionError: could not subscribe to notification signals
            TransportError: the feed failed
        """
        await self.correlator.subscribe()
        outbound = asyncio.create_task(self.react(self.correlator.actions()), name="outbound")
        try:
            await self.forward(frames)
        finally:
            outbound.cancel()
            with suppress(asyncio.CancelledError):
                await outbound
            await self.correlator.unsubscribe()
            self.dispatcher.store.cancel_timers()


async def run(config: Config) -> None:
    """Run the daemon for the configured account until the feed fails."""
    account = config.mastodon.account
    token = await wait_for_token(account)
    _log.info("found stored token for %s", account)

    try:
        session_bus = await bus.connect()
    except (AuthError, DBusError, OSError, ValueError) as e:
        raise SubscriptionError(f"could not connect to the session bus: {e!r}") from e

    store = PendingStore(grace_ms=config.notifications.grace)
    dispatcher = Dispatcher(session_bus, store, app_name=config.notifications.app_name)
    correlator = ActionCorrelator(session_bus, store)
    bridge = Bridge(
        dispatcher,
        correlator,
        open_link=lambda url: open_link(url, browser=config.links.browser or None),
        icon=config.notifications.icon,
        timeout=config.notifications.timeout,
    )

    try:
        async with MastodonClient(config.mastodon.host, token) as client:
            _log.info("started mastodon notify daemon on account %s", account)
            await bridge.run(client.frames())
    finally:
        session_bus.disconnect()
