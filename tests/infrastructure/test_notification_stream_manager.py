"""Tests for the per-user stream registry and the notification publisher."""

from __future__ import annotations

import asyncio

from app.application.use_cases.notifications import create_notification
from app.domain.entities import Notification
from app.infrastructure.notifications import (
    NotificationPublisher,
    NotificationStreamManager,
    notification_manager,
)


def _notification(user_id: str = "user-a", notification_id: int = 1) -> Notification:
    return Notification(
        id=notification_id,
        user_id=user_id,
        title="Task assigned",
        description="You were assigned to Launch",
        type="task",
    )


def test_publish_reaches_every_stream_of_the_user_only():
    async def scenario():
        manager = NotificationStreamManager(queue_size=5)
        first_tab = manager.subscribe("user-a")
        second_tab = manager.subscribe("user-a")
        other_user = manager.subscribe("user-b")

        delivered = manager.publish("user-a", {"type": "notification", "n": 1})

        assert delivered == 2
        assert first_tab.queue.get_nowait() == {"type": "notification", "n": 1}
        assert second_tab.queue.get_nowait() == {"type": "notification", "n": 1}
        assert other_user.queue.empty()

    asyncio.run(scenario())


def test_publish_without_streams_is_a_no_op():
    manager = NotificationStreamManager(queue_size=5)

    assert manager.publish("nobody", {"type": "notification"}) == 0
    assert manager.has_user("nobody") is False


def test_unsubscribe_is_idempotent_and_drops_empty_users():
    async def scenario():
        manager = NotificationStreamManager(queue_size=5)
        subscription = manager.subscribe("user-a")
        assert manager.connection_count("user-a") == 1

        manager.unsubscribe("user-a", subscription)
        manager.unsubscribe("user-a", subscription)

        assert manager.connection_count() == 0
        assert manager.has_user("user-a") is False
        assert manager.publish("user-a", {"type": "notification"}) == 0

    asyncio.run(scenario())


def test_failing_stream_does_not_block_other_streams():
    async def scenario():
        manager = NotificationStreamManager(queue_size=1)
        stalled = manager.subscribe("user-a")
        healthy = manager.subscribe("user-a")
        stalled.queue.put_nowait({"type": "notification", "n": 0})

        delivered = manager.publish("user-a", {"type": "notification", "n": 1})

        assert delivered == 1
        assert healthy.queue.get_nowait() == {"type": "notification", "n": 1}
        assert stalled.queue.qsize() == 1

    asyncio.run(scenario())


def test_messages_keep_publish_order():
    async def scenario():
        manager = NotificationStreamManager(queue_size=10)
        subscription = manager.subscribe("user-a")
        for n in range(3):
            manager.publish("user-a", {"n": n})
        return [subscription.queue.get_nowait()["n"] for _ in range(3)]

    assert asyncio.run(scenario()) == [0, 1, 2]


def test_publisher_serializes_notification_payload():
    async def scenario():
        manager = NotificationStreamManager(queue_size=5)
        subscription = manager.subscribe("user-a")
        NotificationPublisher(manager).dispatch(_notification(notification_id=7))
        return subscription.queue.get_nowait()

    message = asyncio.run(scenario())

    assert message["type"] == "notification"
    assert message["notification"]["id"] == 7
    assert message["notification"]["user_id"] == "user-a"
    assert message["notification"]["read"] is False
    assert message["notification"]["metadata"] == {}


def test_publisher_outside_event_loop_does_not_raise():
    manager = NotificationStreamManager(queue_size=5)

    NotificationPublisher(manager).dispatch(_notification())


def test_subscriber_receives_created_notification_exactly_once(db_session):
    async def scenario():
        early = notification_manager.subscribe("user-a")
        try:
            created = create_notification(
                db_session,
                user_id="user-a",
                title="Task assigned",
                description="You were assigned to Launch",
                type="task",
            )
            late = notification_manager.subscribe("user-a")
            try:
                received = []
                while not early.queue.empty():
                    received.append(early.queue.get_nowait())
                return created, received, late.queue.empty()
            finally:
                notification_manager.unsubscribe("user-a", late)
        finally:
            notification_manager.unsubscribe("user-a", early)

    created, received, late_is_empty = asyncio.run(scenario())

    assert [message["notification"]["id"] for message in received] == [created.id]
    assert late_is_empty is True
