"""Database models"""

from lunch.models.restaurant import Restaurant, Building, RestaurantBuilding
from lunch.models.user import User
from lunch.models.order import Order, OrderStatus, ACTIVE_ORDER_STATUSES
from lunch.models.group_order import GroupOrder, GroupOrderStatus
from lunch.models.lobby import LobbyReservation

__all__ = [
    "Restaurant",
    "Building",
    "RestaurantBuilding",
    "User",
    "Order",
    "OrderStatus",
    "ACTIVE_ORDER_STATUSES",
    "GroupOrder",
    "GroupOrderStatus",
    "LobbyReservation",
]
