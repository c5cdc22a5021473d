"""Slot lobby schemas"""

from datetime import date
from typing import Optional
from pydantic import BaseModel


class LobbyReservationRequest(BaseModel):
    """Join or leave a slot lobby"""
    telegram_user_id: int
    building_id: int
    restaurant_id: int
    delivery_slot: str
    order_date: Optional[date] = None


class LobbyStatusResponse(BaseModel):
    """Quorum state of one lobby"""
    building_id: int
    restaurant_id: int
    delivery_slot: str
    order_date: date
    participant_count: int
    min_participants: int
    is_activated: bool
    lobby_deadline: str
    user_reserved: Optional[bool] = None


class LobbyChangeResponse(BaseModel):
    changed: bool
    status: LobbyStatusResponse
