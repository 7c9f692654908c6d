"""Domain entities exposed by the application."""

from .notification import (
    NOTIFICATION_TYPE_MENTION,
    NOTIFICATION_TYPE_ONBOARDING,
    NOTIFICATION_TYPE_SYSTEM,
    NOTIFICATION_TYPE_TASK,
    NOTIFICATION_TYPE_TEAM,
    NOTIFICATION_TYPES,
    Notification,
    NotificationPage,
)
from .user import User

__all__ = [
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_MENTION",
    "NOTIFICATION_TYPE_ONBOARDING",
    "NOTIFICATION_TYPE_SYSTEM",
    "NOTIFICATION_TYPE_TASK",
    "NOTIFICATION_TYPE_TEAM",
    "Notification",
    "NotificationPage",
    "User",
]
