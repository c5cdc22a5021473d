"""Slot lobby reservation queries"""

from datetime import date
from typing import List, Tuple

from sqlalchemy import select, delete, func

from lunch.models.lobby import LobbyReservation
from lunch.models.user import User
from lunch.repositories.base import BaseRepository


class LobbyRepository(BaseRepository[LobbyReservation]):
    model = LobbyReservation

    def _key(self, building_id: int, restaurant_id: int, delivery_slot: str, order_date: date):
        return (
            LobbyReservation.building_id == building_id,
            LobbyReservation.restaurant_id == restaurant_id,
            LobbyReservation.delivery_slot == delivery_slot,
            LobbyReservation.order_date == order_date,
        )

    async def exists(
        self,
        building_id: int,
        restaurant_id: int,
        delivery_slot: str,
        order_date: date,
        user_id: int,
    ) -> bool:
        result = await self.session.execute(
            select(LobbyReservation.id)
            .where(
                *self._key(building_id, restaurant_id, delivery_slot, order_date),
                LobbyReservation.user_id == user_id,
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def add(
        self,
        building_id: int,
        restaurant_id: int,
        delivery_slot: str,
        order_date: date,
        user_id: int,
    ) -> LobbyReservation:
        return await self.create({
            "building_id": building_id,
            "restaurant_id": restaurant_id,
            "delivery_slot": delivery_slot,
            "order_date": order_date,
            "user_id": user_id,
        })

    async def remove(
        self,
        building_id: int,
        restaurant_id: int,
        delivery_slot: str,
        order_date: date,
        user_id: int,
    ) -> int:
        result = await self.session.execute(
            delete(LobbyReservation).where(
                *self._key(building_id, restaurant_id, delivery_slot, order_date),
                LobbyReservation.user_id == user_id,
            )
        )
        return result.rowcount

    async def count(
        self,
        building_id: int,
        restaurant_id: int,
        delivery_slot: str,
        order_date: date,
    ) -> int:
        result = await self.session.execute(
            select(func.count(func.distinct(LobbyReservation.user_id))).where(
                *self._key(building_id, restaurant_id, delivery_slot, order_date)
            )
        )
        return result.scalar_one()

    async def has_user_reservation(
        self,
        telegram_user_id: int,
        building_id: int,
        restaurant_id: int,
        delivery_slot: str,
        order_date: date,
    ) -> bool:
        result = await self.session.execute(
            select(LobbyReservation.id)
            .join(User, User.id == LobbyReservation.user_id)
            .where(
                User.telegram_user_id == telegram_user_id,
                *self._key(building_id, restaurant_id, delivery_slot, order_date),
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def find_pairs(self, delivery_slot: str, order_date: date) -> List[Tuple[int, int]]:
        """Distinct (building_id, restaurant_id) pairs with reservations for the slot"""
        result = await self.session.execute(
            select(LobbyReservation.building_id, LobbyReservation.restaurant_id)
            .where(
                LobbyReservation.delivery_slot == delivery_slot,
                LobbyReservation.order_date == order_date,
            )
            .distinct()
        )
        return [(row.building_id, row.restaurant_id) for row in result.all()]

    async def delete_for_slot(
        self,
        building_id: int,
        restaurant_id: int,
        delivery_slot: str,
        order_date: date,
    ) -> List[int]:
        """Delete every reservation for the key; returns the users' Telegram ids"""
        result = await self.session.execute(
            select(LobbyReservation.id, User.telegram_user_id)
            .join(User, User.id == LobbyReservation.user_id)
            .where(*self._key(building_id, restaurant_id, delivery_slot, order_date))
        )
        rows = result.all()
        if not rows:
            return []

        # Only the rows read above, so everyone deleted is also notified
        await self.session.execute(
            delete(LobbyReservation).where(LobbyReservation.id.in_([row.id for row in rows]))
        )
        return [row.telegram_user_id for row in rows]
