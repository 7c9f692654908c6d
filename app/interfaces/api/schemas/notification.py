"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class NotificationCreate(BaseModel):
    """Payload used to create a notification for the authenticated user.

    Field content (non-empty text, allowed ``type`` values) is checked by the
    use case so every caller gets the same rules.
    """

    title: str
    description: str
    type: str
    link: str | None = None
    metadata: dict[str, Any] | None = None


class NotificationTestRequest(BaseModel):
    """Payload for the development endpoint that emits a sample notification."""

    type: str = Field(default="system", description="Notification type to emit")


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    user_id: str
    title: str
    description: str
    type: str
    read: bool
    link: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime


class NotificationPageRead(BaseModel):
    """One page of notifications plus pagination cursors."""

    notifications: list[NotificationRead]
    total: int
    next_page: int | None
    has_more: bool


class UnreadCountRead(BaseModel):
    count: int


class MarkAllReadResponse(BaseModel):
    matched_count: int


class ClearNotificationsResponse(BaseModel):
    deleted_count: int


class NotificationDeleteResponse(BaseModel):
    deleted: bool = True


__all__ = [
    "ClearNotificationsResponse",
    "MarkAllReadResponse",
    "NotificationCreate",
    "NotificationDeleteResponse",
    "NotificationPageRead",
    "NotificationRead",
    "NotificationTestRequest",
    "UnreadCountRead",
]
