"""Client-side view over notification pages and live stream events.

:class:`NotificationFeed` is what a UI binds to: it merges list pages fetched
from ``GET /notifications`` with events read from ``GET /notifications/stream``
and decides which arrivals deserve a toast. Every decision is keyed by the
notification id, never by arrival order, so replays and duplicate pushes are
harmless.
"""

from __future__ import annotations

import itertools
import json
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from app.domain.entities import NOTIFICATION_TYPES

CLIENT_ONLY_TYPES: tuple[str, ...] = ("integration", "success", "info", "error")


@dataclass(frozen=True)
class FeedAlert:
    """A user-facing alert (toast and optional browser notification)."""

    id: Any
    title: str
    description: str
    type: str
    link: str
    show_browser_notification: bool


def _parse_timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def _sort_key(item: Mapping[str, Any]) -> tuple[float, int, str]:
    timestamp = _parse_timestamp(item.get("created_at"))
    seconds = timestamp.timestamp() if timestamp is not None else 0.0
    identifier = item.get("id")
    # Same ordering as the server: created_at, then id.
    return seconds, identifier if isinstance(identifier, int) else -1, str(identifier)


class NotificationFeed:
    """Reducer over ``(server pages, pushed events)``."""

    def __init__(self, *, browser_permission: bool = False) -> None:
        self.notifications: list[dict[str, Any]] = []
        self.unread_count = 0
        self.is_connected = False
        self.browser_permission = browser_permission
        self._seen_ids: set[Any] = set()
        self._newest_seen: tuple[float, int, str] | None = None
        self._count_synced = False
        self._local_ids = itertools.count(1)

    def __contains__(self, notification_id: Any) -> bool:
        return any(item["id"] == notification_id for item in self.notifications)

    def _find(self, notification_id: Any) -> dict[str, Any] | None:
        for item in self.notifications:
            if item["id"] == notification_id:
                return item
        return None

    def _remember(self, item: Mapping[str, Any]) -> None:
        self._seen_ids.add(item["id"])
        key = _sort_key(item)
        if self._newest_seen is None or key > self._newest_seen:
            self._newest_seen = key

    def _resort(self) -> None:
        self.notifications.sort(key=_sort_key, reverse=True)

    def set_unread_count(self, count: int) -> None:
        """Adopt the server's authoritative unread count."""

        self.unread_count = max(0, int(count))
        self._count_synced = True

    def apply_page(self, payload: Mapping[str, Any], *, replace: bool = False) -> None:
        """Merge one ``GET /notifications`` response.

        Records fetched through the list are history: they are marked as seen so
        a later duplicate push never raises an alert for them.
        """

        if replace:
            self.notifications = []
        for record in payload.get("notifications", []):
            item = dict(record)
            existing = self._find(item["id"])
            if existing is None:
                self.notifications.append(item)
            else:
                was_unread = not existing.get("read", False)
                existing.update(item)
                if self._count_synced and was_unread and existing.get("read"):
                    self.unread_count = max(0, self.unread_count - 1)
            self._remember(item)
        self._resort()
        if not self._count_synced:
            self.unread_count = sum(1 for item in self.notifications if not item.get("read"))

    def apply_event(self, event: Mapping[str, Any]) -> FeedAlert | None:
        """Apply one decoded stream event; return an alert when one is due."""

        event_type = event.get("type")
        if event_type == "connection":
            self.is_connected = True
            return None
        if event_type == "notification":
            record = event.get("notification")
            if isinstance(record, Mapping):
                return self._receive(dict(record))
        return None

    def _receive(self, item: dict[str, Any]) -> FeedAlert | None:
        notification_id = item.get("id")
        if notification_id is None or notification_id in self._seen_ids:
            return None

        is_newer = self._newest_seen is None or _sort_key(item) >= self._newest_seen
        self.notifications.insert(0, item)
        self._resort()
        if not item.get("read", False):
            self.unread_count += 1
        self._remember(item)

        if not is_newer:
            return None
        return FeedAlert(
            id=notification_id,
            title=item.get("title", ""),
            description=item.get("description", ""),
            type=item.get("type", ""),
            link=item.get("link", ""),
            show_browser_notification=self.browser_permission,
        )

    def disconnect(self) -> None:
        self.is_connected = False

    def mark_read(self, notification_id: Any) -> bool:
        """Mark ``notification_id`` read locally; ``True`` when it changed."""

        item = self._find(notification_id)
        if item is None or item.get("read"):
            return False
        item["read"] = True
        self.unread_count = max(0, self.unread_count - 1)
        return True

    def mark_all_read(self) -> None:
        for item in self.notifications:
            item["read"] = True
        self.unread_count = 0

    def remove(self, notification_id: Any) -> bool:
        item = self._find(notification_id)
        if item is None:
            return False
        self.notifications.remove(item)
        if not item.get("read"):
            self.unread_count = max(0, self.unread_count - 1)
        return True

    def clear(self) -> None:
        self.notifications = []
        self.unread_count = 0

    def push_local(
        self, title: str, description: str, *, type: str = "info", link: str = ""
    ) -> FeedAlert:
        """Add a notice synthesized by the client itself (never persisted)."""

        if type not in CLIENT_ONLY_TYPES and type not in NOTIFICATION_TYPES:
            raise ValueError(f"Unsupported notification type: {type}")
        item = {
            "id": f"local-{next(self._local_ids)}",
            "title": title,
            "description": description,
            "type": type,
            "read": False,
            "link": link,
            "metadata": {"local": True},
            "created_at": datetime.now().astimezone().isoformat(),
        }
        self.notifications.insert(0, item)
        self._seen_ids.add(item["id"])
        self.unread_count += 1
        return FeedAlert(
            id=item["id"],
            title=title,
            description=description,
            type=type,
            link=link,
            show_browser_notification=self.browser_permission,
        )


def iter_sse_events(lines: Iterable[str]) -> Iterator[dict[str, Any]]:
    """Decode an SSE text stream into the JSON payload of each event."""

    data_lines: list[str] = []
    for raw_line in lines:
        line = raw_line.rstrip("\r\n")
        if not line:
            if data_lines:
                yield json.loads("\n".join(data_lines))
                data_lines = []
            continue
        if line.startswith(":"):
            continue
        name, _, value = line.partition(":")
        if name == "data":
            data_lines.append(value[1:] if value.startswith(" ") else value)
    if data_lines:
        yield json.loads("\n".join(data_lines))


__all__ = ["CLIENT_ONLY_TYPES", "FeedAlert", "NotificationFeed", "iter_sse_events"]
