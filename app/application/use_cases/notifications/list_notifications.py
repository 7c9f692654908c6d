"""Use case for listing a user's notifications."""

from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import NotificationPage
from app.infrastructure.repositories import FILTER_ALL, NotificationRepository

from .validators import validate_list_arguments


def list_notifications(
    session: Session,
    *,
    user_id: str,
    page: int = 0,
    limit: int = 10,
    filter_by: str = FILTER_ALL,
    search: str = "",
) -> NotificationPage:
    """Return page ``page`` of ``user_id``'s notifications, newest first."""

    effective_limit, normalized_filter = validate_list_arguments(
        page=page,
        limit=limit,
        filter_by=filter_by,
        max_limit=get_settings().notifications_max_page_size,
    )
    notifications, total = NotificationRepository(session).list_for_user(
        user_id,
        skip=page * effective_limit,
        limit=effective_limit,
        filter_by=normalized_filter,
        search=search,
    )
    return NotificationPage(
        notifications=list(notifications),
        total=total,
        page=page,
        limit=effective_limit,
    )
