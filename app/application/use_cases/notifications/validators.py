"""Validation helpers for notification use cases."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.domain.entities import NOTIFICATION_TYPES
from app.domain.exceptions import NotificationValidationError
from app.infrastructure.repositories import FILTER_ALL, FILTER_UNREAD

TITLE_MAX_LENGTH = 120
LINK_MAX_LENGTH = 512


def _require_text(value: Any, field_name: str, errors: dict[str, str]) -> str:
    if not isinstance(value, str) or not value.strip():
        errors[field_name] = "This field is required"
        return ""
    return value.strip()


def normalize_notification_input(
    *,
    user_id: Any,
    title: Any,
    description: Any,
    type: Any,
    link: Any = None,
    metadata: Any = None,
) -> dict[str, Any]:
    """Return cleaned creation fields or raise :class:`NotificationValidationError`."""

    errors: dict[str, str] = {}
    if isinstance(user_id, int) and not isinstance(user_id, bool):
        user_id = str(user_id)
    cleaned_user_id = _require_text(user_id, "user_id", errors)
    cleaned_title = _require_text(title, "title", errors)
    cleaned_description = _require_text(description, "description", errors)

    if len(cleaned_title) > TITLE_MAX_LENGTH:
        errors["title"] = f"Must be at most {TITLE_MAX_LENGTH} characters"

    if not isinstance(type, str) or not type.strip():
        errors["type"] = "This field is required"
        cleaned_type = ""
    elif type not in NOTIFICATION_TYPES:
        errors["type"] = "Must be one of: " + ", ".join(NOTIFICATION_TYPES)
        cleaned_type = ""
    else:
        cleaned_type = type

    if link is None:
        cleaned_link = ""
    elif not isinstance(link, str):
        errors["link"] = "Must be a string"
        cleaned_link = ""
    else:
        cleaned_link = link.strip()
        if len(cleaned_link) > LINK_MAX_LENGTH:
            errors["link"] = f"Must be at most {LINK_MAX_LENGTH} characters"

    if metadata is None:
        cleaned_metadata: dict[str, Any] = {}
    elif not isinstance(metadata, Mapping):
        errors["metadata"] = "Must be an object"
        cleaned_metadata = {}
    else:
        cleaned_metadata = dict(metadata)

    if errors:
        raise NotificationValidationError(errors)

    return {
        "user_id": cleaned_user_id,
        "title": cleaned_title,
        "description": cleaned_description,
        "type": cleaned_type,
        "link": cleaned_link,
        "metadata": cleaned_metadata,
    }


def validate_list_arguments(
    *, page: int, limit: int, filter_by: str, max_limit: int
) -> tuple[int, str]:
    """Check pagination and filter arguments; return the effective limit and filter."""

    errors: dict[str, str] = {}
    if page < 0:
        errors["page"] = "Must be greater than or equal to 0"
    if limit <= 0:
        errors["limit"] = "Must be greater than 0"

    normalized_filter = (filter_by or FILTER_ALL).strip().lower()
    allowed = (FILTER_ALL, FILTER_UNREAD, *NOTIFICATION_TYPES)
    if normalized_filter not in allowed:
        errors["filter"] = "Must be one of: " + ", ".join(allowed)

    if errors:
        raise NotificationValidationError(errors)
    return min(limit, max_limit), normalized_filter


__all__ = ["normalize_notification_input", "validate_list_arguments"]
