"""User notification and logging package."""

from expensivibe.notifications.notifier import (
    NotificationSink,
    Notifier,
    configure_logging,
)

__all__ = ["NotificationSink", "Notifier", "configure_logging"]
