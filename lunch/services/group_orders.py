"""Restaurant-side resolution of group orders"""

from datetime import date
from typing import List

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from lunch.models.group_order import GroupOrder, GroupOrderStatus
from lunch.models.order import OrderStatus
from lunch.repositories.group_orders import GroupOrderRepository
from lunch.repositories.orders import OrderRepository
from lunch.schemas.group_order import GroupOrderSummary
from lunch.schemas.order import OrderResponse
from lunch.services.errors import GroupOrderResolvedError, NotFoundError

logger = structlog.get_logger()


class GroupOrderService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self._repo = GroupOrderRepository(session)
        self._orders = OrderRepository(session)

    async def list_pending(self) -> List[GroupOrder]:
        """Group orders still waiting for the restaurant, e.g. to resend notifications"""
        return await self._repo.find_pending()

    async def get_summary(
        self,
        restaurant_id: int,
        building_id: int,
        delivery_slot: str,
        order_date: date,
    ) -> GroupOrderSummary:
        orders = await self._orders.find_for_group_summary(
            delivery_slot, building_id, restaurant_id, order_date
        )
        return GroupOrderSummary(
            delivery_slot=delivery_slot,
            building_id=building_id,
            restaurant_id=restaurant_id,
            order_date=order_date,
            participant_count=len(orders),
            total_amount=sum(order.total_price for order in orders),
            orders=[OrderResponse.model_validate(order) for order in orders],
        )

    async def accept(self, group_order_id: int) -> GroupOrder:
        """Accept the group order; its pending orders become restaurant_confirmed"""
        return await self._resolve(
            group_order_id,
            GroupOrderStatus.ACCEPTED.value,
            OrderStatus.RESTAURANT_CONFIRMED.value,
        )

    async def reject(self, group_order_id: int) -> GroupOrder:
        """Reject the group order; its pending orders are cancelled"""
        return await self._resolve(
            group_order_id,
            GroupOrderStatus.REJECTED.value,
            OrderStatus.CANCELLED.value,
        )

    async def _resolve(self, group_order_id: int, group_status: str, order_status: str) -> GroupOrder:
        group_order = await self._repo.get_by_id(group_order_id)
        if not group_order:
            raise NotFoundError("Group order", group_order_id)

        if group_order.status != GroupOrderStatus.PENDING_RESTAURANT.value:
            raise GroupOrderResolvedError(group_order.id, group_order.status)

        group_order.status = group_status
        updated = await self._orders.set_status_for_group(
            group_order.delivery_slot,
            group_order.building_id,
            group_order.restaurant_id,
            group_order.order_date,
            OrderStatus.PENDING.value,
            order_status,
        )
        await self.session.commit()

        logger.info(
            "Group order resolved",
            group_order_id=group_order.id,
            status=group_status,
            orders_updated=updated,
        )
        return group_order
