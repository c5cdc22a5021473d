"""Pydantic schemas for request/response validation"""

from lunch.schemas.order import (
    OrderItem,
    OrderCreate,
    OrderStatusUpdate,
    OrderResponse,
)
from lunch.schemas.group_order import (
    GroupOrderResponse,
    GroupOrderSummary,
    GroupOrderLine,
    GroupOrderNotification,
)
from lunch.schemas.lobby import (
    LobbyReservationRequest,
    LobbyStatusResponse,
    LobbyChangeResponse,
)
from lunch.schemas.directory import (
    BuildingResponse,
    RestaurantResponse,
    UserCreate,
    UserBuildingUpdate,
    UserResponse,
)
from lunch.schemas.slot import (
    DeliverySlotResponse,
    DeliverySlotListResponse,
)

__all__ = [
    "OrderItem",
    "OrderCreate",
    "OrderStatusUpdate",
    "OrderResponse",
    "GroupOrderResponse",
    "GroupOrderSummary",
    "GroupOrderLine",
    "GroupOrderNotification",
    "LobbyReservationRequest",
    "LobbyStatusResponse",
    "LobbyChangeResponse",
    "BuildingResponse",
    "RestaurantResponse",
    "UserCreate",
    "UserBuildingUpdate",
    "UserResponse",
    "DeliverySlotResponse",
    "DeliverySlotListResponse",
]
