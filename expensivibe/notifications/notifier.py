"""
Notifier

DESIGN DECISION: Every user-visible message goes through one object.
This provides:
1. A single place where hosts plug in their toast/alert display
2. A structured log line for every message, even with no host attached
3. A short history for hosts that poll instead of subscribing

The notifier:
- Never raises because a sink failed (a broken display must not break a save)
- Logs through structlog, configured by configure_logging()
"""

import logging
import sys
from collections import deque
from typing import Callable, Optional

import structlog

from expensivibe.config import LoggingSettings
from expensivibe.models.notification import Notification, NotificationLevel


NotificationSink = Callable[[Notification], None]


def configure_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Configure structlog and the stdlib logger it writes through.

    Safe to call more than once; the last call wins.
    """
    level_name = settings.level if settings else "INFO"
    json_output = settings.json_output if settings else True
    level = getattr(logging, level_name)

    logging.basicConfig(format="%(message)s", stream=sys.stderr)
    logging.getLogger("expensivibe").setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


# Defaults until the host applies its own settings.
configure_logging()


class Notifier:
    """
    Central user-notification service.

    Delivers each notification to:
    1. The structured log
    2. Every registered sink (host display)
    3. A bounded in-memory history
    """

    def __init__(self, history_size: int = 50):
        self._sinks: list[NotificationSink] = []
        self._history: deque[Notification] = deque(maxlen=history_size)
        self._logger = structlog.get_logger(__name__)

    def add_sink(self, sink: NotificationSink) -> Callable[[], None]:
        """
        Register a sink. Returns a callable that removes it again.
        """
        self._sinks.append(sink)

        def remove() -> None:
            if sink in self._sinks:
                self._sinks.remove(sink)

        return remove

    def clear_sinks(self) -> None:
        self._sinks.clear()

    @property
    def history(self) -> list[Notification]:
        """Notifications raised so far, oldest first."""
        return list(self._history)

    def notify(
        self,
        level: NotificationLevel,
        message: str,
        **details,
    ) -> Notification:
        """Raise a notification at the given level."""
        notification = Notification(level=level, message=message, details=details)
        log_dict = notification.to_log_dict()

        if level == NotificationLevel.ERROR:
            self._logger.error("notification", **log_dict)
        elif level == NotificationLevel.WARNING:
            self._logger.warning("notification", **log_dict)
        else:
            self._logger.info("notification", **log_dict)

        self._history.append(notification)

        for sink in list(self._sinks):
            try:
                sink(notification)
            except Exception as e:
                # A broken display must not break the caller
                self._logger.error(
                    "notification_sink_failed",
                    error=str(e),
                    message=message,
                )

        return notification

    def success(self, message: str, **details) -> Notification:
        return self.notify(NotificationLevel.SUCCESS, message, **details)

    def info(self, message: str, **details) -> Notification:
        return self.notify(NotificationLevel.INFO, message, **details)

    def warning(self, message: str, **details) -> Notification:
        return self.notify(NotificationLevel.WARNING, message, **details)

    def error(self, message: str, **details) -> Notification:
        return self.notify(NotificationLevel.ERROR, message, **details)
