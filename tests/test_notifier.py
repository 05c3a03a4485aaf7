"""Tests for user notifications and their log lines."""

from structlog.testing import capture_logs

from expensivibe.models import Notification, NotificationLevel
from expensivibe.notifications import Notifier


class TestNotifier:
    """Tests for notification delivery."""

    def test_sinks_receive_notifications(self):
        """Test every sink sees each notification."""
        notifier = Notifier()
        seen: list[Notification] = []
        notifier.add_sink(seen.append)

        notifier.success("Task added")

        assert len(seen) == 1
        assert seen[0].level == NotificationLevel.SUCCESS
        assert seen[0].message == "Task added"

    def test_removed_sink_is_not_called(self):
        """Test the remover returned by add_sink()."""
        notifier = Notifier()
        seen = []
        remove = notifier.add_sink(seen.append)
        remove()
        remove()

        notifier.info("hello")

        assert seen == []

    def test_failing_sink_is_contained(self):
        """Test a broken sink is logged and does not stop other sinks."""
        notifier = Notifier()
        seen = []

        def broken(notification):
            raise RuntimeError("display closed")

        notifier.add_sink(broken)
        notifier.add_sink(seen.append)

        with capture_logs() as logs:
            notifier.warning("Low space")

        assert len(seen) == 1
        assert any(entry["event"] == "notification_sink_failed" for entry in logs)

    def test_history_is_bounded(self):
        """Test only the newest notifications are kept."""
        notifier = Notifier(history_size=3)
        for i in range(5):
            notifier.info(f"m{i}")
        assert [n.message for n in notifier.history] == ["m2", "m3", "m4"]

    def test_every_notification_is_logged(self):
        """Test each notification produces a structured log line."""
        notifier = Notifier()

        with capture_logs() as logs:
            notifier.error("Failed to save data", error="disk full")

        entry = logs[-1]
        assert entry["event"] == "notification"
        assert entry["log_level"] == "error"
        assert entry["notification_level"] == "error"
        assert entry["details"] == {"error": "disk full"}
