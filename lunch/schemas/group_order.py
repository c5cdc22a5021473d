"""Group order schemas"""

from datetime import date, datetime
from typing import List
from pydantic import BaseModel

from lunch.schemas.order import OrderResponse


class GroupOrderResponse(BaseModel):
    """Group order response"""
    id: int
    restaurant_id: int
    building_id: int
    delivery_slot: str
    order_date: date
    status: str
    created_at: datetime

    class Config:
        from_attributes = True


class GroupOrderSummary(BaseModel):
    """Live view of the orders sharing a group key"""
    delivery_slot: str
    building_id: int
    restaurant_id: int
    order_date: date
    participant_count: int
    total_amount: float
    orders: List[OrderResponse]


class GroupOrderLine(BaseModel):
    """One individual order as shown to the restaurant"""
    id: int
    user_id: int
    total_price: float
    items: List[dict]


class GroupOrderNotification(BaseModel):
    """Payload pushed to the restaurant when a group order is created"""
    restaurant_chat_id: int
    restaurant_name: str
    building_name: str
    delivery_slot: str
    group_order_id: int
    orders: List[GroupOrderLine]
    total_amount: float
    participant_count: int
