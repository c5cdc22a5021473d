"""Repository classes over the async session"""

from lunch.repositories.base import BaseRepository
from lunch.repositories.restaurants import (
    RestaurantRepository,
    BuildingRepository,
    UserRepository,
)
from lunch.repositories.orders import OrderRepository
from lunch.repositories.group_orders import GroupOrderRepository
from lunch.repositories.lobby import LobbyRepository

__all__ = [
    "BaseRepository",
    "RestaurantRepository",
    "BuildingRepository",
    "UserRepository",
    "OrderRepository",
    "GroupOrderRepository",
    "LobbyRepository",
]
