"""Promote due scheduled notifications and optionally dispatch their emails.

Intended to run from cron, e.g. every five minutes::

    python -m scripts.process_scheduled_notifications --dispatch
"""

from __future__ import annotations

import argparse
import logging

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.notifications import (
    dispatch_notification_email,
    process_due_notifications,
)
from app.domain.entities import NotificationChannel
from app.infrastructure.database import SessionLocal, initialize_database
from app.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the promotion run."""

    parser = argparse.ArgumentParser(
        description="Promote due scheduled notifications into deliverable records.",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of scheduled notifications to process (default: SCHEDULED_BATCH_SIZE)",
    )
    parser.add_argument(
        "--dispatch",
        action="store_true",
        help="Send the emails of promoted email notifications right away.",
    )
    return parser.parse_args()


def main() -> None:
    """Run one promotion pass using the provided command line arguments."""

    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    initialize_database()

    session = SessionLocal()
    try:
        summary = process_due_notifications(session, limit=args.limit)
        sent = dispatch_failed = 0
        if args.dispatch:
            repository = NotificationRepository(session)
            for notification_id in summary.notification_ids:
                notification = repository.get(notification_id)
                if notification is None or notification.channel != NotificationChannel.EMAIL.value:
                    continue
                result = dispatch_notification_email(session, notification_id=notification_id)
                if result.success:
                    sent += 1
                else:
                    dispatch_failed += 1
                    logger.warning("Dispatch of %s failed: %s", notification_id, result.error)
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while processing scheduled notifications: {exc}") from exc
    finally:
        session.close()

    print(
        "Scheduled notifications processed:\n"
        f"  Processed: {summary.processed}\n"
        f"  Successful: {summary.successful}\n"
        f"  Failed: {summary.failed}"
    )
    if args.dispatch:
        print(f"  Emails sent: {sent}\n  Emails failed: {dispatch_failed}")


if __name__ == "__main__":
    main()
