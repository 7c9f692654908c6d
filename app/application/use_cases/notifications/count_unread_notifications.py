"""Use case for the unread badge counter."""

from sqlalchemy.orm import Session

from app.infrastructure.repositories import NotificationRepository


def count_unread_notifications(session: Session, *, user_id: str) -> int:
    return NotificationRepository(session).count_unread(user_id=user_id)
