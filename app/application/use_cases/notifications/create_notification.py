"""Use case for creating notifications."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.infrastructure.notifications import dispatch_notification
from app.infrastructure.repositories import NotificationRepository
from app.utils import now_in_app_timezone

from .validators import normalize_notification_input

logger = logging.getLogger(__name__)


def create_notification(
    session: Session,
    *,
    user_id: str,
    title: str,
    description: str,
    type: str,
    link: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> Notification:
    """Persist a notification for ``user_id`` and push it to open streams.

    The push happens after the record is committed and cannot fail the call.
    """

    fields = normalize_notification_input(
        user_id=user_id,
        title=title,
        description=description,
        type=type,
        link=link,
        metadata=metadata,
    )
    notification = Notification(
        id=None,
        read=False,
        created_at=now_in_app_timezone(),
        **fields,
    )
    saved = NotificationRepository(session).create(notification)
    logger.info(
        "Created %s notification %s for user %s", saved.type, saved.id, saved.user_id
    )
    dispatch_notification(saved)
    return saved
