"""Utility helpers to generate notifications from TaskMantra domain events."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import (
    NOTIFICATION_TYPE_ONBOARDING,
    NOTIFICATION_TYPE_SYSTEM,
    NOTIFICATION_TYPE_TASK,
    NOTIFICATION_TYPE_TEAM,
    Notification,
)

from .create_notification import create_notification

PRODUCT_NAME = "TaskMantra"
INTEGRATION_CATEGORY = "integration"


def notify_task_assigned(
    session: Session,
    *,
    user_id: str,
    task_id: str,
    task_name: str,
    assigned_by: str,
) -> Notification:
    """Tell ``user_id`` they were assigned to a task."""

    return create_notification(
        session,
        user_id=user_id,
        title="New Task Assigned",
        description=f'You have been assigned to "{task_name}" by {assigned_by}',
        type=NOTIFICATION_TYPE_TASK,
        link=f"/home/tasks/{task_id}",
        metadata={"taskId": task_id, "assignedBy": assigned_by},
    )


def notify_onboarding_completed(
    session: Session, *, user_id: str, organization_name: str
) -> Notification:
    """Welcome a user who just joined ``organization_name``."""

    return create_notification(
        session,
        user_id=user_id,
        title=f"Welcome to {PRODUCT_NAME}",
        description=f"You have been successfully onboarded to {organization_name}",
        type=NOTIFICATION_TYPE_ONBOARDING,
        link="/home",
        metadata={"organizationName": organization_name},
    )


def notify_task_status_changed(
    session: Session,
    *,
    user_id: str,
    task_id: str,
    task_name: str,
    old_status: str,
    new_status: str,
) -> Notification:
    """Report a task moving from ``old_status`` to ``new_status``."""

    return create_notification(
        session,
        user_id=user_id,
        title="Task Status Changed",
        description=f'Task "{task_name}" moved from {old_status} to {new_status}',
        type=NOTIFICATION_TYPE_TASK,
        link=f"/tasks?id={task_id}",
        metadata={"taskId": task_id, "oldStatus": old_status, "newStatus": new_status},
    )


def notify_task_commented(
    session: Session,
    *,
    user_id: str,
    task_id: str,
    task_name: str,
    commenter_name: str,
) -> Notification:
    return create_notification(
        session,
        user_id=user_id,
        title="New Comment on Task",
        description=f'{commenter_name} commented on task "{task_name}"',
        type=NOTIFICATION_TYPE_TASK,
        link=f"/tasks?id={task_id}",
        metadata={"taskId": task_id, "commenterName": commenter_name},
    )


def notify_invitation_sent(
    session: Session,
    *,
    user_id: str,
    email: str,
    organization_name: str,
    role: str,
    organization_id: str,
) -> Notification:
    """Confirm to the inviter that an invitation went out."""

    return create_notification(
        session,
        user_id=user_id,
        title="Invitation Sent",
        description=(
            f"You have successfully invited {email} to join {organization_name} as a {role}."
        ),
        type=NOTIFICATION_TYPE_TEAM,
        link=f"/dashboard/organizations/{organization_id}/members",
        metadata={"email": email, "organizationName": organization_name, "role": role},
    )


_INTEGRATION_MESSAGES: dict[str, tuple[str, str]] = {
    "connected": ("{name} Integration Connected", "Your {name} account has been connected successfully."),
    "updated": ("{name} Integration Updated", "Your {name} integration has been updated successfully."),
    "disconnected": ("{name} Integration Disconnected", "Your {name} integration has been disconnected."),
    "synced": ("{name} Sync Completed", "Your {name} data has been synced successfully."),
}


def notify_integration_event(
    session: Session, *, user_id: str, integration: str, action: str
) -> Notification:
    """Record an integration lifecycle event (Notion connect, sync, ...).

    Integration events are stored as ``system`` notifications; the category
    lives in ``metadata`` so clients can still style them differently.
    """

    name = integration.strip().capitalize() or "Integration"
    title_template, description_template = _INTEGRATION_MESSAGES.get(
        action,
        ("{name} Integration", "Your {name} integration reported: " + action),
    )
    return create_notification(
        session,
        user_id=user_id,
        title=title_template.format(name=name),
        description=description_template.format(name=name),
        type=NOTIFICATION_TYPE_SYSTEM,
        link="/integrations",
        metadata={
            "category": INTEGRATION_CATEGORY,
            "integration": integration,
            "action": action,
        },
    )


__all__ = [
    "notify_integration_event",
    "notify_invitation_sent",
    "notify_onboarding_completed",
    "notify_task_assigned",
    "notify_task_commented",
    "notify_task_status_changed",
]
