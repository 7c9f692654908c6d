"""Endpoints and event stream for user notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    clear_notifications as clear_notifications_uc,
    count_unread_notifications as count_unread_notifications_uc,
    create_notification as create_notification_uc,
    delete_notification as delete_notification_uc,
    get_notification as get_notification_uc,
    list_notifications as list_notifications_uc,
    mark_all_notifications_read as mark_all_notifications_read_uc,
    mark_notification_read as mark_notification_read_uc,
)
from app.config import get_settings
from app.domain.entities import Notification, User
from app.domain.exceptions import NotificationValidationError
from app.infrastructure.database import get_db
from app.infrastructure.notifications import (
    notification_event_stream,
    notification_manager,
)
from app.interfaces.api.dependencies import get_current_user, get_stream_user
from app.interfaces.api.schemas import (
    ClearNotificationsResponse,
    MarkAllReadResponse,
    NotificationCreate,
    NotificationDeleteResponse,
    NotificationPageRead,
    NotificationRead,
    NotificationTestRequest,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])

_NOT_FOUND_DETAIL = "Notification not found"


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        user_id=notification.user_id,
        title=notification.title,
        description=notification.description,
        type=notification.type,
        read=notification.read,
        link=notification.link or "",
        metadata=notification.metadata or {},
        created_at=notification.created_at,
    )


def _validation_error(exc: NotificationValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"message": "Invalid notification", "errors": exc.errors},
    )


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND_DETAIL)


@router.post("", response_model=NotificationRead)
def create_notification(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationRead:
    """Create a notification addressed to the authenticated user."""

    try:
        notification = create_notification_uc(
            db,
            user_id=current_user.id,
            title=payload.title,
            description=payload.description,
            type=payload.type,
            link=payload.link,
            metadata=payload.metadata,
        )
    except NotificationValidationError as exc:
        raise _validation_error(exc) from exc
    return _notification_to_schema(notification)


@router.get("", response_model=NotificationPageRead)
def list_notifications(
    page: int = Query(0, description="Zero-based page number"),
    limit: int | None = Query(None, description="Page size"),
    filter_by: str = Query("all", alias="filter", description="all, unread or a type"),
    search: str = Query("", description="Case-insensitive text in title or description"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationPageRead:
    """Return the authenticated user's notifications, newest first."""

    try:
        result = list_notifications_uc(
            db,
            user_id=current_user.id,
            page=page,
            limit=limit if limit is not None else get_settings().notifications_default_page_size,
            filter_by=filter_by,
            search=search,
        )
    except NotificationValidationError as exc:
        raise _validation_error(exc) from exc
    return NotificationPageRead(
        notifications=[_notification_to_schema(n) for n in result.notifications],
        total=result.total,
        next_page=result.next_page,
        has_more=result.has_more,
    )


@router.get("/unread-count", response_model=UnreadCountRead)
def unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UnreadCountRead:
    return UnreadCountRead(count=count_unread_notifications_uc(db, user_id=current_user.id))


@router.get("/stream")
async def stream_notifications(
    request: Request,
    current_user: User = Depends(get_stream_user),
) -> StreamingResponse:
    """Server-sent event stream of notifications created after connecting."""

    events = notification_event_stream(
        notification_manager,
        current_user.id,
        is_disconnected=request.is_disconnected,
        heartbeat_interval=get_settings().sse_heartbeat_seconds,
    )
    return StreamingResponse(
        events,
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@router.post("/test", response_model=NotificationRead)
def create_test_notification(
    payload: NotificationTestRequest | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationRead:
    """Emit a sample notification to exercise persistence and the live stream."""

    notification_type = payload.type if payload else "system"
    try:
        notification = create_notification_uc(
            db,
            user_id=current_user.id,
            title="Test Notification",
            description=f"This is a test {notification_type} notification",
            type=notification_type,
            link="/notifications",
        )
    except NotificationValidationError as exc:
        raise _validation_error(exc) from exc
    return _notification_to_schema(notification)


@router.patch("/mark-all-read", response_model=MarkAllReadResponse)
def mark_all_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MarkAllReadResponse:
    matched = mark_all_notifications_read_uc(db, user_id=current_user.id)
    return MarkAllReadResponse(matched_count=matched)


@router.delete("/clear-all", response_model=ClearNotificationsResponse)
def clear_all(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ClearNotificationsResponse:
    """Permanently delete every notification of the authenticated user."""

    deleted = clear_notifications_uc(db, user_id=current_user.id)
    return ClearNotificationsResponse(deleted_count=deleted)


@router.get("/{notification_id}", response_model=NotificationRead)
def read_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationRead:
    notification = get_notification_uc(db, notification_id, user_id=current_user.id)
    if notification is None:
        raise _not_found()
    return _notification_to_schema(notification)


@router.patch("/{notification_id}/read", response_model=NotificationRead)
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationRead:
    """Mark one notification as read; repeating the call is harmless."""

    notification = mark_notification_read_uc(db, notification_id, user_id=current_user.id)
    if notification is None:
        raise _not_found()
    return _notification_to_schema(notification)


@router.delete("/{notification_id}", response_model=NotificationDeleteResponse)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationDeleteResponse:
    if not delete_notification_uc(db, notification_id, user_id=current_user.id):
        raise _not_found()
    return NotificationDeleteResponse(deleted=True)
