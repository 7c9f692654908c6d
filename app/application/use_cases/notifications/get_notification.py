"""Use case for retrieving a single notification."""

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.infrastructure.repositories import NotificationRepository


def get_notification(
    session: Session, notification_id: int, *, user_id: str
) -> Notification | None:
    """Return the notification if it exists and belongs to ``user_id``."""

    return NotificationRepository(session).get_for_user(notification_id, user_id=user_id)
