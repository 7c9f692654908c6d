"""Use cases for removing notifications."""

import logging

from sqlalchemy.orm import Session

from app.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


def delete_notification(session: Session, notification_id: int, *, user_id: str) -> bool:
    """Permanently delete one notification; ``False`` when not found or not owned."""

    return NotificationRepository(session).delete(notification_id, user_id=user_id)


def clear_notifications(session: Session, *, user_id: str) -> int:
    """Permanently delete every notification of ``user_id``."""

    deleted = NotificationRepository(session).delete_all(user_id=user_id)
    logger.info("Cleared %d notifications for user %s", deleted, user_id)
    return deleted
