"""Tests for server-sent event framing and the stream generator lifecycle."""

from __future__ import annotations

import asyncio

from app.application.notification_feed import iter_sse_events
from app.infrastructure.notifications import (
    NotificationStreamManager,
    format_sse_event,
    notification_event_stream,
)


def _disconnect_after(checks: int):
    calls = {"count": 0}

    async def is_disconnected() -> bool:
        calls["count"] += 1
        return calls["count"] > checks

    return is_disconnected


def test_format_sse_event_renders_a_self_delimited_block():
    rendered = format_sse_event("notification", {"type": "notification", "id": 3}, event_id=3)

    assert rendered == (
        'id: 3\nevent: notification\ndata: {"type":"notification","id":3}\n\n'
    )


def test_stream_yields_connection_then_notifications_and_unsubscribes():
    async def scenario():
        manager = NotificationStreamManager(queue_size=5)
        stream = notification_event_stream(
            manager,
            "user-a",
            is_disconnected=_disconnect_after(1),
            heartbeat_interval=5,
        )
        chunks = [await stream.__anext__()]
        manager.publish(
            "user-a", {"type": "notification", "notification": {"id": 11, "title": "Hi"}}
        )
        chunks.extend([chunk async for chunk in stream])
        return chunks, manager.connection_count("user-a")

    chunks, remaining = asyncio.run(scenario())

    events = list(iter_sse_events("".join(chunks).splitlines(keepends=True)))
    assert [event["type"] for event in events] == ["connection", "notification"]
    assert events[1]["notification"]["id"] == 11
    assert chunks[1].startswith("id: 11\nevent: notification\n")
    assert remaining == 0


def test_stream_emits_heartbeat_when_idle():
    async def scenario():
        manager = NotificationStreamManager(queue_size=5)
        return [
            chunk
            async for chunk in notification_event_stream(
                manager,
                "user-a",
                is_disconnected=_disconnect_after(1),
                heartbeat_interval=0.01,
            )
        ]

    chunks = asyncio.run(scenario())

    assert len(chunks) == 2
    assert chunks[1].startswith("event: heartbeat\n")


def test_closing_stream_early_releases_subscription():
    async def scenario():
        manager = NotificationStreamManager(queue_size=5)
        stream = notification_event_stream(
            manager,
            "user-a",
            is_disconnected=_disconnect_after(100),
            heartbeat_interval=5,
        )
        await stream.__anext__()
        assert manager.connection_count("user-a") == 1
        await stream.aclose()
        return manager.connection_count("user-a"), manager.has_user("user-a")

    remaining, registered = asyncio.run(scenario())

    assert remaining == 0
    assert registered is False


def test_stream_closed_before_first_event_leaves_no_subscription():
    async def scenario():
        manager = NotificationStreamManager(queue_size=5)
        stream = notification_event_stream(
            manager,
            "user-a",
            is_disconnected=_disconnect_after(100),
            heartbeat_interval=5,
        )
        await stream.aclose()
        delivered = manager.publish("user-a", {"type": "notification"})
        return manager.connection_count("user-a"), delivered

    remaining, delivered = asyncio.run(scenario())

    assert remaining == 0
    assert delivered == 0
