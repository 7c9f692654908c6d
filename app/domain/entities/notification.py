"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Final

NOTIFICATION_TYPE_MENTION: Final[str] = "mention"
NOTIFICATION_TYPE_TASK: Final[str] = "task"
NOTIFICATION_TYPE_TEAM: Final[str] = "team"
NOTIFICATION_TYPE_SYSTEM: Final[str] = "system"
NOTIFICATION_TYPE_ONBOARDING: Final[str] = "onboarding"

NOTIFICATION_TYPES: Final[tuple[str, ...]] = (
    NOTIFICATION_TYPE_MENTION,
    NOTIFICATION_TYPE_TASK,
    NOTIFICATION_TYPE_TEAM,
    NOTIFICATION_TYPE_SYSTEM,
    NOTIFICATION_TYPE_ONBOARDING,
)


@dataclass
class Notification:
    """Alert addressed to a single user."""

    id: int | None
    user_id: str
    title: str
    description: str
    type: str
    read: bool = False
    link: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None


@dataclass(frozen=True)
class NotificationPage:
    """One offset-paginated slice of a user's notifications."""

    notifications: list[Notification]
    total: int
    page: int
    limit: int

    @property
    def has_more(self) -> bool:
        return self.page * self.limit + len(self.notifications) < self.total

    @property
    def next_page(self) -> int | None:
        return self.page + 1 if self.has_more else None


__all__ = [
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_MENTION",
    "NOTIFICATION_TYPE_ONBOARDING",
    "NOTIFICATION_TYPE_SYSTEM",
    "NOTIFICATION_TYPE_TASK",
    "NOTIFICATION_TYPE_TEAM",
    "Notification",
    "NotificationPage",
]
