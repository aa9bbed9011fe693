"""Tests for mastonotify.desktop.dispatcher."""

import asyncio

import pytest

from mastonotify import APP_NAME
from mastonotify.desktop.bus import NOTIFICATIONS_INTERFACE, NOTIFICATIONS_SERVICE
from mastonotify.desktop.dispatcher import Dispatcher
from mastonotify.desktop.store import PendingStore
from mastonotify.errors import DispatchError
from mastonotify.mastodon.models import NotificationKind


@pytest.mark.asyncio
async def test_send_builds_notify_request(bus, store, make_notification):
    dispatcher = Dispatcher(bus, store)
    notification = make_notification(NotificationKind.FAVOURITE, username="alice")

    notification_id = await dispatcher.send(notification, "dialog-information", 5000)

    assert notification_id == 1
    (call,) = bus.calls_to("Notify")
    assert call.destination == NOTIFICATIONS_SERVICE
    assert call.interface == NOTIFICATIONS_INTERFACE
    assert call.signature == "susssasa{sv}i"
    assert call.body == [
        APP_NAME,
        0,
        "dialog-information",
        "alice favourited your status",
        "hi",
        ["default", "default"],
        {},
        5000,
    ]


@pytest.mark.asyncio
async def test_send_uses_configured_app_name(bus, store, make_notification):
    dispatcher = Dispatcher(bus, store, app_name="custom-app")
    await dispatcher.send(make_notification(), "", 5000)
    assert bus.calls_to("Notify")[0].body[0] == "custom-app"


@pytest.mark.asyncio
async def test_send_stores_notification_under_returned_id(bus, store, make_notification):
    dispatcher = Dispatcher(bus, store)
    first = make_notification(username="first")
    second = make_notification(username="second")

    assert await dispatcher.send(first, "", 5000) == 1
    assert await dispatcher.send(second, "", 5000) == 2

    assert len(store) == 2
    assert await store.remove(2) == second
    store.cancel_timers()


@pytest.mark.asyncio
async def test_sent_notification_expires(bus, make_notification):
    store = PendingStore()
    dispatcher = Dispatcher(bus, store)

    await dispatcher.send(make_notification(), "", 500)
    assert len(store) == 1

    # 500ms timeout + 200ms grace + buffer
    await asyncio.sleep(0.9)
    assert len(store) == 0


@pytest.mark.asyncio
async def test_failed_send_stores_nothing(bus, store, make_notification):
    bus.errors["Notify"] = "org.freedesktop.DBus.Error.ServiceUnknown"
    dispatcher = Dispatcher(bus, store)

    with pytest.raises(DispatchError, match="ServiceUnknown"):
        await dispatcher.send(make_notification(), "", 5000)

    assert len(store) == 0


@pytest.mark.asyncio
async def test_close_does_not_touch_store(bus, store, make_notification):
    dispatcher = Dispatcher(bus, store)
    notification_id = await dispatcher.send(make_notification(), "", 5000)

    await dispatcher.close(notification_id)

    (call,) = bus.calls_to("CloseNotification")
    assert call.signature == "u"
    assert call.body == [notification_id]
    assert notification_id in store
    store.cancel_timers()


@pytest.mark.asyncio
async def test_close_failure_raises(bus, store):
    bus.errors["CloseNotification"] = "org.freedesktop.DBus.Error.Failed"
    with pytest.raises(DispatchError):
        await Dispatcher(bus, store).close(1)
