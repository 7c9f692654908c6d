"""Registry of open notification streams grouped by user."""

from __future__ import annotations

import asyncio
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any

from app.config import get_settings
from app.domain.exceptions import ChannelDeliveryError

logger = logging.getLogger(__name__)

_subscription_ids = itertools.count(1)


@dataclass(eq=False)
class NotificationSubscription:
    """Handle for one open stream (one browser tab, one device)."""

    user_id: str
    queue: asyncio.Queue
    id: int = field(default_factory=lambda: next(_subscription_ids))
    closed: bool = False

    def deliver(self, message: dict[str, Any]) -> None:
        """Enqueue ``message`` without waiting."""

        if self.closed:
            raise ChannelDeliveryError(f"Subscription {self.id} is closed")
        try:
            self.queue.put_nowait(message)
        except asyncio.QueueFull as exc:
            raise ChannelDeliveryError(
                f"Subscription {self.id} has {self.queue.qsize()} pending events"
            ) from exc


class NotificationStreamManager:
    """Track open streams per user and fan messages out to them.

    The registry is only touched from the event loop thread and every method
    performs a single synchronous step on one user's set, so no lock is needed
    and users never contend with each other.
    """

    def __init__(self, queue_size: int | None = None) -> None:
        self._queue_size = queue_size
        self._connections: dict[str, set[NotificationSubscription]] = {}

    def subscribe(self, user_id: str) -> NotificationSubscription:
        """Register a new stream for ``user_id``. Nothing is replayed."""

        maxsize = self._queue_size or get_settings().sse_queue_size
        subscription = NotificationSubscription(
            user_id=user_id, queue=asyncio.Queue(maxsize=maxsize)
        )
        self._connections.setdefault(user_id, set()).add(subscription)
        logger.debug(
            "Stream %s opened for user %s (%d open)",
            subscription.id,
            user_id,
            len(self._connections[user_id]),
        )
        return subscription

    def unsubscribe(self, user_id: str, subscription: NotificationSubscription) -> None:
        """Remove ``subscription``; calling it again is a no-op."""

        subscription.closed = True
        connections = self._connections.get(user_id)
        if connections is None:
            return
        connections.discard(subscription)
        if not connections:
            self._connections.pop(user_id, None)
        logger.debug("Stream %s closed for user %s", subscription.id, user_id)

    def publish(self, user_id: str, message: dict[str, Any]) -> int:
        """Deliver ``message`` to every open stream of ``user_id``.

        Returns the number of streams that accepted the message. A failing
        stream is logged and skipped.
        """

        delivered = 0
        for subscription in list(self._connections.get(user_id, ())):
            try:
                subscription.deliver(message)
            except ChannelDeliveryError as exc:
                logger.warning("Dropped live notification for user %s: %s", user_id, exc)
                continue
            delivered += 1
        return delivered

    def connection_count(self, user_id: str | None = None) -> int:
        """Return open streams for ``user_id`` or across all users."""

        if user_id is not None:
            return len(self._connections.get(user_id, ()))
        return sum(len(connections) for connections in self._connections.values())

    def has_user(self, user_id: str) -> bool:
        return user_id in self._connections


notification_manager = NotificationStreamManager()


__all__ = ["NotificationStreamManager", "NotificationSubscription", "notification_manager"]
