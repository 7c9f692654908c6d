"""Tests for the client-side notification feed reducer."""

from __future__ import annotations

import pytest

from app.application.notification_feed import NotificationFeed, iter_sse_events
from app.infrastructure.notifications import format_sse_event


def _record(notification_id: int, created_at: str, *, read: bool = False) -> dict:
    return {
        "id": notification_id,
        "user_id": "user-a",
        "title": f"Notification {notification_id}",
        "description": "Body",
        "type": "task",
        "read": read,
        "link": f"/tasks?id={notification_id}",
        "metadata": {},
        "created_at": created_at,
    }


def _push(record: dict) -> dict:
    return {"type": "notification", "notification": record}


@pytest.fixture()
def feed() -> NotificationFeed:
    feed = NotificationFeed(browser_permission=True)
    feed.apply_page(
        {
            "notifications": [
                _record(2, "2026-10-17T10:05:00+00:00"),
                _record(1, "2026-10-17T10:00:00+00:00", read=True),
            ],
            "has_more": False,
            "next_page": None,
        }
    )
    return feed


def test_page_populates_list_and_unread_count(feed):
    assert [item["id"] for item in feed.notifications] == [2, 1]
    assert feed.unread_count == 1
    assert feed.is_connected is False


def test_connection_event_marks_feed_connected(feed):
    assert feed.apply_event({"type": "connection"}) is None
    assert feed.is_connected is True

    feed.disconnect()
    assert feed.is_connected is False


def test_new_push_is_prepended_and_alerts_once(feed):
    record = _record(3, "2026-10-17T10:10:00+00:00")

    alert = feed.apply_event(_push(record))
    duplicate = feed.apply_event(_push(record))

    assert alert is not None
    assert alert.id == 3
    assert alert.link == "/tasks?id=3"
    assert alert.show_browser_notification is True
    assert duplicate is None
    assert [item["id"] for item in feed.notifications] == [3, 2, 1]
    assert feed.unread_count == 2


def test_push_for_record_already_listed_is_ignored(feed):
    assert feed.apply_event(_push(_record(2, "2026-10-17T10:05:00+00:00"))) is None
    assert len(feed.notifications) == 2
    assert feed.unread_count == 1


def test_stale_push_is_stored_without_alert(feed):
    alert = feed.apply_event(_push(_record(0, "2026-10-17T09:00:00+00:00")))

    assert alert is None
    assert [item["id"] for item in feed.notifications] == [2, 1, 0]
    assert feed.unread_count == 2


def test_heartbeat_changes_nothing(feed):
    assert feed.apply_event({"type": "heartbeat", "timestamp": "now"}) is None
    assert len(feed.notifications) == 2


def test_local_bookkeeping_mirrors_server_operations(feed):
    assert feed.mark_read(2) is True
    assert feed.mark_read(2) is False
    assert feed.unread_count == 0

    feed.apply_event(_push(_record(3, "2026-10-17T10:10:00+00:00")))
    feed.apply_event(_push(_record(4, "2026-10-17T10:11:00+00:00")))
    assert feed.unread_count == 2

    assert feed.remove(4) is True
    assert feed.remove(4) is False
    assert feed.unread_count == 1

    feed.mark_all_read()
    assert feed.unread_count == 0
    assert all(item["read"] for item in feed.notifications)

    feed.clear()
    assert feed.notifications == []


def test_server_count_is_authoritative_after_sync(feed):
    feed.set_unread_count(12)
    feed.apply_page({"notifications": [_record(2, "2026-10-17T10:05:00+00:00", read=True)]})

    assert feed.unread_count == 11


def test_local_notices_use_client_only_types(feed):
    alert = feed.push_local("Notion synced", "Your data is up to date", type="success")

    assert alert.type == "success"
    assert feed.notifications[0]["id"] == alert.id
    assert feed.unread_count == 2

    with pytest.raises(ValueError):
        feed.push_local("Oops", "Unknown", type="celebration")


def test_sse_text_feeds_the_reducer():
    stream_text = format_sse_event("connection", {"type": "connection"}) + format_sse_event(
        "notification",
        _push(_record(5, "2026-10-17T11:00:00+00:00")),
        event_id=5,
    )
    feed = NotificationFeed()

    alerts = [feed.apply_event(event) for event in iter_sse_events(stream_text.splitlines())]

    assert alerts[0] is None
    assert alerts[1] is not None and alerts[1].show_browser_notification is False
    assert feed.is_connected is True
    assert feed.unread_count == 1
