"""Slot lobby quorum engine"""

from datetime import date
from typing import List

import structlog
from pydantic import BaseModel, Field
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lunch.repositories.lobby import LobbyRepository
from lunch.slots import SlotConfig

logger = structlog.get_logger()


class LobbyCancellation(BaseModel):
    """A lobby dropped at its deadline for lack of quorum"""
    building_id: int
    restaurant_id: int
    delivery_slot: str
    slot_time: str
    order_date: date
    participant_count: int
    telegram_user_ids: List[int] = Field(default_factory=list)


class LobbyQuorumEngine:
    """
    Reservations for a delivery slot before ordering.

    A lobby is activated when its live reservation count reaches
    min_lobby_participants. Activation is never stored; it is recomputed
    from the reservation rows on every check.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], slot_config: SlotConfig):
        self.session_factory = session_factory
        self.slot_config = slot_config

    @property
    def min_participants(self) -> int:
        return self.slot_config.min_lobby_participants

    async def add_reservation(
        self,
        building_id: int,
        restaurant_id: int,
        delivery_slot: str,
        order_date: date,
        user_id: int,
    ) -> bool:
        """Insert-or-ignore. Returns False when the user was already reserved."""
        async with self.session_factory() as session:
            repo = LobbyRepository(session)
            if await repo.exists(building_id, restaurant_id, delivery_slot, order_date, user_id):
                return False
            try:
                await repo.add(building_id, restaurant_id, delivery_slot, order_date, user_id)
                await session.commit()
            except IntegrityError:
                await session.rollback()
                return False

        logger.info(
            "Lobby reservation added",
            slot=delivery_slot,
            building_id=building_id,
            restaurant_id=restaurant_id,
            user_id=user_id,
        )
        return True

    async def remove_reservation(
        self,
        building_id: int,
        restaurant_id: int,
        delivery_slot: str,
        order_date: date,
        user_id: int,
    ) -> bool:
        async with self.session_factory() as session:
            removed = await LobbyRepository(session).remove(
                building_id, restaurant_id, delivery_slot, order_date, user_id
            )
            await session.commit()
        return removed > 0

    async def count_reservations(
        self,
        building_id: int,
        restaurant_id: int,
        delivery_slot: str,
        order_date: date,
    ) -> int:
        async with self.session_factory() as session:
            return await LobbyRepository(session).count(
                building_id, restaurant_id, delivery_slot, order_date
            )

    async def is_activated(
        self,
        building_id: int,
        restaurant_id: int,
        delivery_slot: str,
        order_date: date,
    ) -> bool:
        count = await self.count_reservations(building_id, restaurant_id, delivery_slot, order_date)
        return count >= self.min_participants

    async def has_user_reservation(
        self,
        telegram_user_id: int,
        building_id: int,
        restaurant_id: int,
        delivery_slot: str,
        order_date: date,
    ) -> bool:
        async with self.session_factory() as session:
            return await LobbyRepository(session).has_user_reservation(
                telegram_user_id, building_id, restaurant_id, delivery_slot, order_date
            )

    async def sweep_deadlines(self, now_minutes: int, today: date) -> List[LobbyCancellation]:
        """Cancel under-filled lobbies whose deadline has passed"""
        cancellations = []

        for slot in self.slot_config.slots:
            try:
                if not self.slot_config.is_lobby_deadline_passed(slot.id, now_minutes):
                    continue

                async with self.session_factory() as session:
                    pairs = await LobbyRepository(session).find_pairs(slot.id, today)
            except Exception as e:
                logger.error("Lobby sweep failed for slot", slot=slot.id, error=str(e))
                continue

            for building_id, restaurant_id in pairs:
                try:
                    cancellation = await self._cancel_if_under_quorum(
                        building_id, restaurant_id, slot.id, slot.time, today
                    )
                except Exception as e:
                    logger.error(
                        "Lobby sweep failed",
                        slot=slot.id,
                        building_id=building_id,
                        restaurant_id=restaurant_id,
                        error=str(e),
                    )
                    continue

                if cancellation is not None:
                    cancellations.append(cancellation)

        return cancellations

    async def _cancel_if_under_quorum(
        self,
        building_id: int,
        restaurant_id: int,
        delivery_slot: str,
        slot_time: str,
        today: date,
    ):
        async with self.session_factory() as session:
            repo = LobbyRepository(session)
            count = await repo.count(building_id, restaurant_id, delivery_slot, today)
            if count == 0 or count >= self.min_participants:
                return None

            telegram_ids = await repo.delete_for_slot(building_id, restaurant_id, delivery_slot, today)
            await session.commit()

        logger.info(
            "Lobby cancelled for lack of quorum",
            slot=delivery_slot,
            building_id=building_id,
            restaurant_id=restaurant_id,
            had_participants=count,
            min_required=self.min_participants,
        )

        return LobbyCancellation(
            building_id=building_id,
            restaurant_id=restaurant_id,
            delivery_slot=delivery_slot,
            slot_time=slot_time,
            order_date=today,
            participant_count=count,
            telegram_user_ids=telegram_ids,
        )
