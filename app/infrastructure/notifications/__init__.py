"""Realtime notification helpers for the infrastructure layer."""

from .manager import (
    NotificationStreamManager,
    NotificationSubscription,
    notification_manager,
)
from .publisher import (
    NOTIFICATION_EVENT,
    NotificationPublisher,
    dispatch_notification,
    notification_publisher,
    serialize_notification,
)
from .stream import (
    CONNECTION_EVENT,
    HEARTBEAT_EVENT,
    format_sse_event,
    notification_event_stream,
)

__all__ = [
    "CONNECTION_EVENT",
    "HEARTBEAT_EVENT",
    "NOTIFICATION_EVENT",
    "NotificationStreamManager",
    "NotificationSubscription",
    "notification_manager",
    "NotificationPublisher",
    "notification_publisher",
    "dispatch_notification",
    "serialize_notification",
    "format_sse_event",
    "notification_event_stream",
]
