"""Notification sink interface"""

from abc import ABC, abstractmethod

from lunch.schemas.group_order import GroupOrderNotification


class NotificationSink(ABC):
    """Outbound channel to restaurants and end users"""

    @abstractmethod
    async def send_group_order(self, notification: GroupOrderNotification) -> None:
        """Push a freshly created group order to the restaurant side"""
        pass

    @abstractmethod
    async def notify_lobby_cancelled(self, telegram_user_id: int, slot_time: str) -> None:
        """Tell a user their lobby reservation was dropped for lack of quorum"""
        pass


def format_group_order(notification: GroupOrderNotification) -> str:
    """Render a group order as a plain-text chat message"""
    lines = [
        f"Group order #{notification.group_order_id}",
        f"Building: {notification.building_name}",
        f"Delivery slot: {notification.delivery_slot}",
        f"Participants: {notification.participant_count}",
        f"Total: {notification.total_amount:.2f}",
        "",
    ]

    for order in notification.orders:
        lines.append(f"Order #{order.id} (user {order.user_id}) - {order.total_price:.2f}")
        for item in order.items:
            quantity = item.get("quantity", 1)
            lines.append(f"  - {item.get('name', '?')} x{quantity}")

    return "\n".join(lines)


def format_lobby_cancelled(slot_time: str) -> str:
    return (
        f"The {slot_time} delivery slot did not gather enough participants "
        "and was cancelled. Your reservation has been removed."
    )
