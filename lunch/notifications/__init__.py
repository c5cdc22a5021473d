"""Outbound notification sinks"""

from lunch.config import settings
from lunch.notifications.base import NotificationSink
from lunch.notifications.log_sink import LoggingNotificationSink
from lunch.notifications.telegram import TelegramNotificationSink


def get_notification_sink() -> NotificationSink:
    """Telegram when a bot token is configured, logging otherwise"""
    if settings.telegram_bot_token:
        return TelegramNotificationSink()
    return LoggingNotificationSink()


__all__ = [
    "NotificationSink",
    "LoggingNotificationSink",
    "TelegramNotificationSink",
    "get_notification_sink",
]
