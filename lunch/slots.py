"""Delivery slot deadline arithmetic"""

from typing import List, Optional

from lunch.config import DeliverySlot, settings


def slot_minutes(slot_id: str) -> int:
    """Parse "HH:MM" into minutes since midnight"""
    try:
        hours_str, minutes_str = slot_id.split(":")
        hours, minutes = int(hours_str), int(minutes_str)
    except (AttributeError, ValueError):
        raise ValueError(f"Malformed slot time: {slot_id!r}")

    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f"Malformed slot time: {slot_id!r}")

    return hours * 60 + minutes


def format_minutes(total: int) -> str:
    hours, minutes = divmod(total, 60)
    return f"{hours:02d}:{minutes:02d}"


def deadline_minutes(slot_id: str, lead_minutes: int) -> int:
    """Deadline is the slot time minus the lead, clamped at midnight"""
    return max(slot_minutes(slot_id) - lead_minutes, 0)


def is_past(slot_id: str, lead_minutes: int, now_minutes: int) -> bool:
    return now_minutes > deadline_minutes(slot_id, lead_minutes)


class SlotConfig:
    """Configured delivery slots and the tunables that drive their deadlines"""

    def __init__(
        self,
        slots: List[DeliverySlot],
        order_lead_minutes: int,
        lobby_lead_minutes: Optional[int] = None,
        min_lobby_participants: int = 1,
    ):
        self.slots = list(slots)
        self.order_lead_minutes = order_lead_minutes
        self.lobby_lead_minutes = (
            order_lead_minutes if lobby_lead_minutes is None else lobby_lead_minutes
        )
        self.min_lobby_participants = min_lobby_participants

    @classmethod
    def from_settings(cls) -> "SlotConfig":
        return cls(
            slots=settings.delivery_slots,
            order_lead_minutes=settings.order_lead_minutes,
            lobby_lead_minutes=settings.effective_lobby_lead_minutes,
            min_lobby_participants=settings.min_lobby_participants,
        )

    def get(self, slot_id: str) -> Optional[DeliverySlot]:
        for slot in self.slots:
            if slot.id == slot_id:
                return slot
        return None

    def order_deadline(self, slot_id: str) -> int:
        return deadline_minutes(slot_id, self.order_lead_minutes)

    def lobby_deadline(self, slot_id: str) -> int:
        return deadline_minutes(slot_id, self.lobby_lead_minutes)

    def is_order_deadline_passed(self, slot_id: str, now_minutes: int) -> bool:
        return is_past(slot_id, self.order_lead_minutes, now_minutes)

    def is_lobby_deadline_passed(self, slot_id: str, now_minutes: int) -> bool:
        return is_past(slot_id, self.lobby_lead_minutes, now_minutes)

    def availability(self, now_minutes: int) -> List[dict]:
        """Slots with their order deadline and whether ordering is still open"""
        result = []
        for slot in self.slots:
            deadline = self.order_deadline(slot.id)
            result.append({
                "id": slot.id,
                "time": slot.time,
                "deadline": format_minutes(deadline),
                "is_available": now_minutes <= deadline,
            })
        return result
