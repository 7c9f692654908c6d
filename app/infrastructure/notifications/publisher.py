"""Utility helpers to push notifications to open streams."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from anyio import from_thread

from app.domain.entities import Notification

from .manager import NotificationStreamManager, notification_manager

logger = logging.getLogger(__name__)

NOTIFICATION_EVENT = "notification"


class NotificationPublisher:
    """Serialize notifications and hand them to the stream manager."""

    def __init__(self, manager: NotificationStreamManager) -> None:
        self._manager = manager

    def dispatch(self, notification: Notification) -> None:
        """Push ``notification`` to its user's open streams, best effort.

        Never raises: the record is already persisted and clients that miss the
        push still see it on their next list fetch.
        """

        message = {"type": NOTIFICATION_EVENT, "notification": self._serialize(notification)}
        try:
            self._publish_on_loop(notification.user_id, message)
        except Exception:
            logger.exception(
                "Live delivery of notification %s to user %s failed",
                notification.id,
                notification.user_id,
            )

    def _publish_on_loop(self, user_id: str, message: dict[str, Any]) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            # Sync endpoints run in anyio worker threads; hop onto the loop.
            try:
                from_thread.run_sync(self._manager.publish, user_id, message)
            except RuntimeError:
                logger.debug("No event loop reachable; live push skipped for user %s", user_id)
        else:
            self._manager.publish(user_id, message)

    @staticmethod
    def _serialize(notification: Notification) -> dict[str, Any]:
        return {
            "id": notification.id,
            "user_id": notification.user_id,
            "title": notification.title,
            "description": notification.description,
            "type": notification.type,
            "read": notification.read,
            "link": notification.link or "",
            "metadata": notification.metadata or {},
            "created_at": notification.created_at.isoformat()
            if notification.created_at
            else None,
        }


notification_publisher = NotificationPublisher(notification_manager)


def dispatch_notification(notification: Notification) -> None:
    """Public helper that delegates to the shared publisher instance."""

    notification_publisher.dispatch(notification)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the stream payload representation for ``notification``."""

    return NotificationPublisher._serialize(notification)


__all__ = [
    "NOTIFICATION_EVENT",
    "NotificationPublisher",
    "dispatch_notification",
    "notification_publisher",
    "serialize_notification",
]
