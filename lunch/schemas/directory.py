"""Building, restaurant and user schemas"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class BuildingResponse(BaseModel):
    """Building response"""
    id: int
    name: str
    address: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class RestaurantResponse(BaseModel):
    """Restaurant response"""
    id: int
    name: str
    chat_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class UserCreate(BaseModel):
    """Register a Telegram user"""
    telegram_user_id: int
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    building_id: Optional[int] = None


class UserBuildingUpdate(BaseModel):
    building_id: int


class UserResponse(BaseModel):
    """User response"""
    id: int
    telegram_user_id: int
    username: Optional[str]
    first_name: Optional[str]
    last_name: Optional[str]
    building_id: Optional[int]
    created_at: datetime

    class Config:
        from_attributes = True
