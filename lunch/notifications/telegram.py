"""Telegram Bot API notification sink"""

from typing import Optional, Union

import httpx
import structlog

from lunch.config import settings
from lunch.notifications.base import NotificationSink, format_group_order, format_lobby_cancelled
from lunch.schemas.group_order import GroupOrderNotification

logger = structlog.get_logger()

_MAX_MESSAGE_LEN = 4096


class TelegramNotificationSink(NotificationSink):
    """Sends notifications through the Bot API sendMessage method"""

    def __init__(
        self,
        token: Optional[str] = None,
        api_base: Optional[str] = None,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        token = token or settings.telegram_bot_token
        api_base = (api_base or settings.telegram_api_base).rstrip("/")
        self._base = f"{api_base}/bot{token}"
        self.timeout = timeout
        self._transport = transport

    async def send_message(self, chat_id: Union[int, str], text: str) -> None:
        """Send text to chat_id, splitting into chunks if needed. Raises on HTTP errors."""
        chunks = [text[i:i + _MAX_MESSAGE_LEN] for i in range(0, len(text), _MAX_MESSAGE_LEN)]

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            for chunk in chunks:
                response = await client.post(
                    f"{self._base}/sendMessage",
                    json={"chat_id": chat_id, "text": chunk},
                )
                response.raise_for_status()

        logger.debug("Telegram message sent", chat_id=chat_id, chunks=len(chunks))

    async def send_group_order(self, notification: GroupOrderNotification) -> None:
        await self.send_message(notification.restaurant_chat_id, format_group_order(notification))

    async def notify_lobby_cancelled(self, telegram_user_id: int, slot_time: str) -> None:
        await self.send_message(telegram_user_id, format_lobby_cancelled(slot_time))
