"""Shared fixtures."""

import pytest
from helpers import FakeBus

from mastonotify.desktop.store import PendingStore
from mastonotify.mastodon.models import Account, Notification, NotificationKind, Status


@pytest.fixture
def bus() -> FakeBus:
    return FakeBus()


@pytest.fixture
def store() -> PendingStore:
    return PendingStore(grace_ms=50)


@pytest.fixture
def make_notification():
    """Build a Notification without going through JSON."""

    def _make(
        kind: NotificationKind = NotificationKind.FAVOURITE,
        url: str | None = "https://x/1",
        username: str = "alice",
        display_name: str = "",
    ) -> Notification:
        account = Account(id="1", username=username, display_name=display_name, acct=username)
        status = None
        if url is not None:
            author = Account(id="2", username="bob", display_name="Bob", acct="bob")
            status = Status(id="100", url=url, account=author, content="<p>hi</p>")
        return Notification(account=account, kind=kind, status=status)

    return _make
