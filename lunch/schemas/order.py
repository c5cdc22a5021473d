"""Order schemas"""

from datetime import date, datetime
from typing import Optional, List
from pydantic import BaseModel, Field


class OrderItem(BaseModel):
    """Single line of an order"""
    name: str
    price: float
    quantity: int = 1


class OrderCreate(BaseModel):
    """Create order request"""
    user_id: int
    restaurant_id: int
    building_id: int
    delivery_slot: str
    items: List[OrderItem] = Field(min_length=1)
    total_price: float = Field(gt=0)


class OrderStatusUpdate(BaseModel):
    """Update order status request"""
    status: str


class OrderResponse(BaseModel):
    """Order response"""
    id: int
    user_id: int
    restaurant_id: int
    building_id: int
    delivery_slot: str
    order_date: Optional[date]
    items: List[OrderItem]
    total_price: float
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
