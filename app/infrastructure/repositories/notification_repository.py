"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from app.domain.entities import Notification
from app.domain.exceptions import StorageError
from app.infrastructure.models import NotificationModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

logger = logging.getLogger(__name__)

FILTER_ALL = "all"
FILTER_UNREAD = "unread"


class NotificationRepository:
    """Provide user-scoped CRUD operations for :class:`Notification` objects.

    Every query filters on ``user_id``; callers never reach another user's rows.
    Database failures are rolled back and re-raised as :class:`StorageError`.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    @contextmanager
    def _storage_guard(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Notification store failed during %s: %s", operation, exc)
            raise StorageError(f"Notification store unavailable during {operation}") from exc

    def _user_query(self, user_id: str) -> Query:
        return self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id
        )

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel(
            user_id=notification.user_id,
            title=notification.title,
            description=notification.description,
            type=notification.type,
            read=notification.read,
            link=notification.link or "",
            extra=dict(notification.metadata or {}),
            created_at=ensure_app_naive_datetime(
                notification.created_at or now_in_app_timezone()
            ),
        )
        with self._storage_guard("create"):
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def get_for_user(self, notification_id: int, *, user_id: str) -> Notification | None:
        with self._storage_guard("get"):
            model = self._user_query(user_id).filter(
                NotificationModel.id == notification_id
            ).one_or_none()
        return self._to_entity(model) if model is not None else None

    def list_for_user(
        self,
        user_id: str,
        *,
        skip: int = 0,
        limit: int = 10,
        filter_by: str = FILTER_ALL,
        search: str = "",
    ) -> tuple[Sequence[Notification], int]:
        """Return one page of notifications plus the size of the filtered set."""

        query = self._user_query(user_id)
        if filter_by == FILTER_UNREAD:
            query = query.filter(NotificationModel.read.is_(False))
        elif filter_by and filter_by != FILTER_ALL:
            query = query.filter(NotificationModel.type == filter_by)

        term = (search or "").strip()
        if term:
            query = query.filter(
                or_(
                    NotificationModel.title.icontains(term, autoescape=True),
                    NotificationModel.description.icontains(term, autoescape=True),
                )
            )

        with self._storage_guard("list"):
            total = query.count()
            models = (
                query.order_by(
                    NotificationModel.created_at.desc(), NotificationModel.id.desc()
                )
                .offset(skip)
                .limit(limit)
                .all()
            )
        return [self._to_entity(model) for model in models], total

    def mark_as_read(self, notification_id: int, *, user_id: str) -> Notification | None:
        with self._storage_guard("mark_as_read"):
            model = self._user_query(user_id).filter(
                NotificationModel.id == notification_id
            ).one_or_none()
            if model is None:
                return None
            if not model.read:
                model.read = True
                self.session.commit()
                self.session.refresh(model)
        return self._to_entity(model)

    def mark_all_as_read(self, *, user_id: str) -> int:
        with self._storage_guard("mark_all_as_read"):
            updated = (
                self._user_query(user_id)
                .filter(NotificationModel.read.is_(False))
                .update({NotificationModel.read: True}, synchronize_session=False)
            )
            self.session.commit()
        return int(updated or 0)

    def delete(self, notification_id: int, *, user_id: str) -> bool:
        with self._storage_guard("delete"):
            deleted = (
                self._user_query(user_id)
                .filter(NotificationModel.id == notification_id)
                .delete(synchronize_session=False)
            )
            self.session.commit()
        return bool(deleted)

    def delete_all(self, *, user_id: str) -> int:
        with self._storage_guard("delete_all"):
            deleted = self._user_query(user_id).delete(synchronize_session=False)
            self.session.commit()
        return int(deleted or 0)

    def count_unread(self, *, user_id: str) -> int:
        with self._storage_guard("count_unread"):
            return (
                self._user_query(user_id)
                .filter(NotificationModel.read.is_(False))
                .count()
            )

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            description=model.description,
            type=model.type,
            read=bool(model.read),
            link=model.link or "",
            metadata=dict(model.extra or {}),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["FILTER_ALL", "FILTER_UNREAD", "NotificationRepository"]
