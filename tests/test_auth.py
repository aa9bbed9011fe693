"""Tests for mastonotify.mastodon.auth."""

from unittest.mock import patch

import pytest
from keyring.errors import KeyringLocked

from mastonotify import APP_NAME
from mastonotify.mastodon import auth


@patch("mastonotify.mastodon.auth.keyring.get_password", return_value="secret")
def test_get_token(mock_get):
    assert auth.get_token("alice@hachyderm.io") == "secret"
    mock_get.assert_called_once_with(APP_NAME, "alice@hachyderm.io")


@patch("mastonotify.mastodon.auth.keyring.set_password")
def test_set_token(mock_set):
    auth.set_token("alice@hachyderm.io", "secret")
    mock_set.assert_called_once_with(APP_NAME, "alice@hachyderm.io", "secret")


@pytest.mark.asyncio
@patch("mastonotify.mastodon.auth.keyring.get_password")
async def test_wait_for_token_polls_until_stored(mock_get):
    mock_get.side_effect = [None, KeyringLocked("locked"), "secret"]

    token = await auth.wait_for_token("alice@hachyderm.io", poll_interval=0)

    assert token == "secret"
    assert mock_get.call_count == 3
