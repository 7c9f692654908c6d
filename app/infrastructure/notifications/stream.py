"""Server-sent event framing for the live notification stream."""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

from app.utils import now_in_app_timezone

from .manager import NotificationStreamManager, NotificationSubscription

CONNECTION_EVENT = "connection"
HEARTBEAT_EVENT = "heartbeat"


def format_sse_event(event: str, data: Any, *, event_id: Any = None) -> str:
    """Render one self-delimited SSE message."""

    lines: list[str] = []
    if event_id is not None:
        lines.append(f"id: {event_id}")
    lines.append(f"event: {event}")
    payload = json.dumps(data, default=str, separators=(",", ":"))
    lines.extend(f"data: {chunk}" for chunk in payload.splitlines() or [""])
    return "\n".join(lines) + "\n\n"


async def notification_event_stream(
    manager: NotificationStreamManager,
    user_id: str,
    *,
    is_disconnected: Callable[[], Awaitable[bool]],
    heartbeat_interval: float,
) -> AsyncIterator[str]:
    """Yield SSE messages for ``user_id`` until the client goes away.

    The stream registers itself on first iteration and releases the
    subscription on every exit path: client disconnect, response
    cancellation, or server shutdown. A stream closed before it was started
    never touches the registry.
    """

    subscription: NotificationSubscription | None = None
    try:
        subscription = manager.subscribe(user_id)
        yield format_sse_event(
            CONNECTION_EVENT,
            {"type": CONNECTION_EVENT, "message": "Connected to notification stream"},
        )
        while not await is_disconnected():
            try:
                message = await asyncio.wait_for(
                    subscription.queue.get(), timeout=heartbeat_interval
                )
            except asyncio.TimeoutError:
                yield format_sse_event(
                    HEARTBEAT_EVENT,
                    {
                        "type": HEARTBEAT_EVENT,
                        "timestamp": now_in_app_timezone().isoformat(),
                    },
                )
                continue

            notification = message.get("notification") or {}
            yield format_sse_event(
                message.get("type", "message"), message, event_id=notification.get("id")
            )
    finally:
        if subscription is not None:
            manager.unsubscribe(user_id, subscription)


__all__ = [
    "CONNECTION_EVENT",
    "HEARTBEAT_EVENT",
    "format_sse_event",
    "notification_event_stream",
]
