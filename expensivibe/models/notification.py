"""
Notification Models

A notification is the user-visible side of an event: the message a host
shows as a toast. Every notification is also written to the structured
log, so the log holds the full history even when no host is listening.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from expensivibe.models.entities import utc_now


class NotificationLevel(str, Enum):
    """How a notification should be presented."""
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Notification(BaseModel):
    """A single user-facing message."""

    level: NotificationLevel = Field(
        default=NotificationLevel.INFO,
        description="Presentation level"
    )
    message: str = Field(
        ...,
        max_length=500,
        description="Short human-readable text"
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        description="When the notification was raised (UTC)"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Extra context for the log, not shown to the user"
    )

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "notification_level": self.level.value,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "details": self.details,
        }
