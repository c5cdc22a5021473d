"""Individual order intake and status changes"""

from datetime import date
from typing import List, Optional

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from lunch.clock import Clock
from lunch.models.order import Order, OrderStatus
from lunch.repositories.orders import OrderRepository
from lunch.repositories.restaurants import RestaurantRepository, BuildingRepository, UserRepository
from lunch.schemas.order import OrderCreate
from lunch.services.errors import (
    ActiveOrderExistsError,
    InvalidStatusError,
    NotFoundError,
    OrderNotCancellableError,
    SlotClosedError,
    UnknownSlotError,
)
from lunch.slots import SlotConfig, format_minutes

logger = structlog.get_logger()

ORDER_STATUSES = [status.value for status in OrderStatus]


class OrderService:
    def __init__(self, session: AsyncSession, slot_config: SlotConfig, clock: Clock):
        self.session = session
        self.slot_config = slot_config
        self.clock = clock
        self._repo = OrderRepository(session)

    async def create_order(self, data: OrderCreate) -> Order:
        """
        Place a pending order for today.

        Rejects unknown slots, slots past their order deadline and a second
        active order for the same user, building, restaurant and slot. The
        last check is backed by a partial unique index, so a concurrent
        duplicate fails the same way.
        """
        slot = self.slot_config.get(data.delivery_slot)
        if slot is None:
            raise UnknownSlotError(data.delivery_slot)

        if self.slot_config.is_order_deadline_passed(slot.id, self.clock.now_minutes()):
            raise SlotClosedError(slot.id, format_minutes(self.slot_config.order_deadline(slot.id)))

        if await UserRepository(self.session).get_by_id(data.user_id) is None:
            raise NotFoundError("User", data.user_id)
        if await RestaurantRepository(self.session).get_by_id(data.restaurant_id) is None:
            raise NotFoundError("Restaurant", data.restaurant_id)
        if await BuildingRepository(self.session).get_by_id(data.building_id) is None:
            raise NotFoundError("Building", data.building_id)

        today = self.clock.today()
        existing = await self._repo.find_active_by_user_and_slot(
            data.user_id, data.building_id, data.restaurant_id, slot.id, today
        )
        if existing:
            raise ActiveOrderExistsError(existing.id)

        try:
            order = await self._repo.create({
                "user_id": data.user_id,
                "restaurant_id": data.restaurant_id,
                "building_id": data.building_id,
                "delivery_slot": slot.id,
                "order_date": today,
                "items": [item.model_dump() for item in data.items],
                "total_price": data.total_price,
                "status": OrderStatus.PENDING.value,
            })
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ActiveOrderExistsError()

        logger.info(
            "Order created",
            order_id=order.id,
            user_id=order.user_id,
            slot=order.delivery_slot,
            restaurant_id=order.restaurant_id,
            building_id=order.building_id,
        )
        return order

    async def get_order(self, order_id: int) -> Order:
        order = await self._repo.get_by_id(order_id)
        if not order:
            raise NotFoundError("Order", order_id)
        return order

    async def list_user_orders(self, user_id: int) -> List[Order]:
        return await self._repo.find_by_user(user_id)

    async def find_active_by_user_and_slot(
        self,
        user_id: int,
        building_id: int,
        restaurant_id: int,
        delivery_slot: str,
        order_date: Optional[date] = None,
    ) -> Optional[Order]:
        return await self._repo.find_active_by_user_and_slot(
            user_id, building_id, restaurant_id, delivery_slot, order_date or self.clock.today()
        )

    async def cancel_order(self, order_id: int) -> Order:
        order = await self.get_order(order_id)
        if order.status != OrderStatus.PENDING.value:
            raise OrderNotCancellableError(order.status)

        await self._repo.update_status(order, OrderStatus.CANCELLED.value)
        await self.session.commit()

        logger.info("Order cancelled", order_id=order.id, user_id=order.user_id)
        return order

    async def update_status(self, order_id: int, status: str) -> Order:
        if status not in ORDER_STATUSES:
            raise InvalidStatusError(status, ORDER_STATUSES)

        order = await self.get_order(order_id)
        try:
            await self._repo.update_status(order, status)
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ActiveOrderExistsError()

        logger.info("Order status updated", order_id=order.id, status=status)
        return order
