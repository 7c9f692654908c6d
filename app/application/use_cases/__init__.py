"""Aggregate application use cases."""

from .notifications import (
    count_unread_notifications,
    create_notification,
    list_notifications,
)

__all__ = [
    "count_unread_notifications",
    "create_notification",
    "list_notifications",
]
