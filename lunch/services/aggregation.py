"""Deadline-driven order aggregation into group orders"""

from datetime import date
from typing import List, Optional

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lunch.models.group_order import GroupOrderStatus
from lunch.repositories.group_orders import GroupOrderRepository
from lunch.repositories.orders import OrderRepository
from lunch.repositories.restaurants import RestaurantRepository, BuildingRepository
from lunch.schemas.group_order import GroupOrderNotification, GroupOrderLine
from lunch.slots import SlotConfig

logger = structlog.get_logger()


class OrderAggregationEngine:
    """
    Folds pending orders into one group order per
    (restaurant, building, slot, day) once the slot's order deadline passes.

    Safe to run repeatedly: keys that already have a group order are
    skipped, and the unique constraint on the key turns a concurrent
    duplicate into a no-op.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], slot_config: SlotConfig):
        self.session_factory = session_factory
        self.slot_config = slot_config

    async def aggregate(self, now_minutes: int, today: date) -> List[GroupOrderNotification]:
        """Create group orders for every due key; returns what to send to restaurants"""
        created = []

        for slot in self.slot_config.slots:
            try:
                if not self.slot_config.is_order_deadline_passed(slot.id, now_minutes):
                    continue

                async with self.session_factory() as session:
                    pairs = await OrderRepository(session).find_pending_groups(slot.id, today)
            except Exception as e:
                logger.error("Aggregation failed for slot", slot=slot.id, error=str(e))
                continue

            for restaurant_id, building_id in pairs:
                try:
                    notification = await self.aggregate_group(restaurant_id, building_id, slot.id, today)
                except Exception as e:
                    logger.error(
                        "Aggregation failed",
                        slot=slot.id,
                        restaurant_id=restaurant_id,
                        building_id=building_id,
                        error=str(e),
                    )
                    continue

                if notification is not None:
                    created.append(notification)

        return created

    async def aggregate_group(
        self,
        restaurant_id: int,
        building_id: int,
        delivery_slot: str,
        order_date: date,
    ) -> Optional[GroupOrderNotification]:
        """Create the group order for one key, or return None if there is nothing to do"""
        async with self.session_factory() as session:
            group_orders = GroupOrderRepository(session)

            existing = await group_orders.find_by_key(restaurant_id, building_id, delivery_slot, order_date)
            if existing:
                return None

            # Re-read: orders may have been cancelled since the pairs were listed
            orders = await OrderRepository(session).find_pending_for_group(
                delivery_slot, building_id, restaurant_id, order_date
            )
            if not orders:
                return None

            restaurant = await RestaurantRepository(session).get_by_id(restaurant_id)
            building = await BuildingRepository(session).get_by_id(building_id)
            if not restaurant or not building:
                logger.warning(
                    "Pending orders reference a missing restaurant or building",
                    slot=delivery_slot,
                    restaurant_id=restaurant_id,
                    building_id=building_id,
                    restaurant_found=restaurant is not None,
                    building_found=building is not None,
                )
                return None

            try:
                group_order = await group_orders.create({
                    "restaurant_id": restaurant_id,
                    "building_id": building_id,
                    "delivery_slot": delivery_slot,
                    "order_date": order_date,
                    "status": GroupOrderStatus.PENDING_RESTAURANT.value,
                })
                await session.commit()
            except IntegrityError:
                await session.rollback()
                logger.info(
                    "Group order already exists",
                    slot=delivery_slot,
                    restaurant_id=restaurant_id,
                    building_id=building_id,
                )
                return None

            total_amount = sum(order.total_price for order in orders)

            logger.info(
                "Group order created at deadline",
                group_order_id=group_order.id,
                slot=delivery_slot,
                restaurant_id=restaurant_id,
                building_id=building_id,
                order_count=len(orders),
            )

            return GroupOrderNotification(
                restaurant_chat_id=restaurant.chat_id,
                restaurant_name=restaurant.name,
                building_name=building.name,
                delivery_slot=delivery_slot,
                group_order_id=group_order.id,
                orders=[
                    GroupOrderLine(
                        id=order.id,
                        user_id=order.user_id,
                        total_price=order.total_price,
                        items=order.items or [],
                    )
                    for order in orders
                ],
                total_amount=total_amount,
                participant_count=len(orders),
            )
