"""Repository implementations for infrastructure layer."""

from .notification_repository import FILTER_ALL, FILTER_UNREAD, NotificationRepository

__all__ = ["FILTER_ALL", "FILTER_UNREAD", "NotificationRepository"]
