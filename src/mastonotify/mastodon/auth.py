"""Access token storage in the system keyring."""

import asyncio

import keyring
from keyring.errors import KeyringError

from .. import APP_NAME
from ..log import get_logger

_log = get_logger("mastodon.auth")

# Seconds between keyring lookups while waiting for `mastonotify setup`
POLL_INTERVAL = 5.0


def get_token(account: str) -> str | None:
    """Get the stored token for an account ("user@host"), or None."""
    return keyring.get_password(APP_NAME, account)


def set_token(account: str, token: str) -> None:
    keyring.set_password(APP_NAME, account, token)


async def wait_for_token(account: str, poll_interval: float = POLL_INTERVAL) -> str:
    """Poll the keyring until a token for the account shows up."""
    while True:
        try:
            token = get_token(account)
        except KeyringError as e:
            _log.warning("keyring lookup for %s failed: %s", account, e)
            token = None

        if token:
            return token

        _log.info("no token stored for %s; run `mastonotify setup` to configure one", account)
        await asyncio.sleep(poll_interval)
