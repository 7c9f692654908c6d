"""Errors raised by the notification domain."""

from __future__ import annotations


class NotificationValidationError(ValueError):
    """Raised when notification input is missing or invalid.

    ``errors`` maps each offending field to a human readable reason so the API
    layer can return field-level detail.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        summary = "; ".join(f"{name}: {reason}" for name, reason in self.errors.items())
        super().__init__(summary or "Invalid notification")


class StorageError(RuntimeError):
    """Raised when the notification store cannot complete an operation."""


class ChannelDeliveryError(RuntimeError):
    """Raised when a pushed event cannot be written to one open stream."""


__all__ = ["ChannelDeliveryError", "NotificationValidationError", "StorageError"]
