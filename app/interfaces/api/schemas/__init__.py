from .notification import (
    ClearNotificationsResponse,
    MarkAllReadResponse,
    NotificationCreate,
    NotificationDeleteResponse,
    NotificationPageRead,
    NotificationRead,
    NotificationTestRequest,
    UnreadCountRead,
)

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
