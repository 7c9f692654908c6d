"""Use cases for marking notifications as read."""

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.infrastructure.repositories import NotificationRepository


def mark_notification_read(
    session: Session, notification_id: int, *, user_id: str
) -> Notification | None:
    """Mark one notification as read.

    Returns ``None`` when the notification does not exist or belongs to another
    user; both cases look the same to the caller. Marking an already read
    notification succeeds without changes.
    """

    return NotificationRepository(session).mark_as_read(notification_id, user_id=user_id)


def mark_all_notifications_read(session: Session, *, user_id: str) -> int:
    """Mark every unread notification of ``user_id`` as read; return how many changed."""

    return NotificationRepository(session).mark_all_as_read(user_id=user_id)
