"""Use cases for managing user notifications."""

from .count_unread_notifications import count_unread_notifications
from .create_notification import create_notification
from .delete_notification import clear_notifications, delete_notification
from .events import (
    notify_integration_event,
    notify_invitation_sent,
    notify_onboarding_completed,
    notify_task_assigned,
    notify_task_commented,
    notify_task_status_changed,
)
from .get_notification import get_notification
from .list_notifications import list_notifications
from .mark_notification_read import mark_all_notifications_read, mark_notification_read

__all__ = [
    "clear_notifications",
    "count_unread_notifications",
    "create_notification",
    "delete_notification",
    "get_notification",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "notify_integration_event",
    "notify_invitation_sent",
    "notify_onboarding_completed",
    "notify_task_assigned",
    "notify_task_commented",
    "notify_task_status_changed",
]
