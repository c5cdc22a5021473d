"""Delivery slot schemas"""

from typing import List
from pydantic import BaseModel


class DeliverySlotResponse(BaseModel):
    """Delivery slot with its ordering deadline"""
    id: str
    time: str
    deadline: str
    is_available: bool


class DeliverySlotListResponse(BaseModel):
    timezone: str
    items: List[DeliverySlotResponse]
