"""Utility script to send a notification to a user from the command line."""

from __future__ import annotations

import argparse
import json

from app.application.use_cases.notifications import create_notification
from app.domain.entities import NOTIFICATION_TYPES
from app.domain.exceptions import NotificationValidationError, StorageError
from app.infrastructure.database import SessionLocal, initialize_database
from app.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for notification delivery."""

    parser = argparse.ArgumentParser(
        description="Create a TaskMantra notification or print a development access token.",
    )
    parser.add_argument("user_id", help="Identifier of the user that receives the notification")
    parser.add_argument("--title", default="Test Notification", help="Notification headline")
    parser.add_argument(
        "--description",
        default=None,
        help="Notification body (default: 'This is a test <type> notification')",
    )
    parser.add_argument(
        "--type",
        default="system",
        choices=NOTIFICATION_TYPES,
        help="Notification type (default: system)",
    )
    parser.add_argument("--link", default="/notifications", help="Deep link for the client")
    parser.add_argument(
        "--metadata",
        default=None,
        help="JSON object stored with the notification",
    )
    parser.add_argument(
        "--print-token",
        action="store_true",
        help="Only print a signed access token for user_id and exit.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a notification using the provided command line arguments."""

    args = parse_args()

    if args.print_token:
        print(create_access_token({"sub": args.user_id}))
        return

    try:
        metadata = json.loads(args.metadata) if args.metadata else None
    except json.JSONDecodeError as exc:
        raise SystemExit(f"--metadata is not valid JSON: {exc}") from exc

    initialize_database()

    session = SessionLocal()
    try:
        notification = create_notification(
            session,
            user_id=args.user_id,
            title=args.title,
            description=args.description or f"This is a test {args.type} notification",
            type=args.type,
            link=args.link,
            metadata=metadata,
        )
    except NotificationValidationError as exc:
        raise SystemExit(f"Invalid notification: {exc}") from exc
    except StorageError as exc:
        raise SystemExit(f"Could not store the notification: {exc}") from exc
    else:
        print(
            "Notification created:\n"
            f"  ID: {notification.id}\n"
            f"  User: {notification.user_id}\n"
            f"  Type: {notification.type}\n"
            f"  Title: {notification.title}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
