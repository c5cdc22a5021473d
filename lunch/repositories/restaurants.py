"""Restaurant, building and user lookups"""

from typing import List, Optional

from sqlalchemy import select

from lunch.models.restaurant import Restaurant, Building, RestaurantBuilding
from lunch.models.user import User
from lunch.repositories.base import BaseRepository


class RestaurantRepository(BaseRepository[Restaurant]):
    model = Restaurant

    async def find_by_building(self, building_id: int) -> List[Restaurant]:
        """Restaurants delivering to the building, by name"""
        result = await self.session.execute(
            select(Restaurant)
            .join(RestaurantBuilding, RestaurantBuilding.restaurant_id == Restaurant.id)
            .where(RestaurantBuilding.building_id == building_id)
            .order_by(Restaurant.name)
        )
        return list(result.scalars().all())


class BuildingRepository(BaseRepository[Building]):
    model = Building

    async def find_all(self) -> List[Building]:
        result = await self.session.execute(select(Building).order_by(Building.name, Building.id))
        return list(result.scalars().all())


class UserRepository(BaseRepository[User]):
    model = User

    async def find_by_telegram_id(self, telegram_user_id: int) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(User.telegram_user_id == telegram_user_id)
        )
        return result.scalar_one_or_none()
