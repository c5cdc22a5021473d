"""Notification sink that only logs"""

import structlog

from lunch.notifications.base import NotificationSink
from lunch.schemas.group_order import GroupOrderNotification

logger = structlog.get_logger()


class LoggingNotificationSink(NotificationSink):
    """Used when no bot token is configured"""

    async def send_group_order(self, notification: GroupOrderNotification) -> None:
        logger.info(
            "Group order notification (not delivered)",
            group_order_id=notification.group_order_id,
            restaurant_chat_id=notification.restaurant_chat_id,
            participant_count=notification.participant_count,
            total_amount=notification.total_amount,
        )

    async def notify_lobby_cancelled(self, telegram_user_id: int, slot_time: str) -> None:
        logger.info(
            "Lobby cancellation notice (not delivered)",
            telegram_user_id=telegram_user_id,
            slot=slot_time,
        )
