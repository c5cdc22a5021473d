"""Group order queries"""

from datetime import date
from typing import List, Optional

from sqlalchemy import select

from lunch.models.group_order import GroupOrder, GroupOrderStatus
from lunch.repositories.base import BaseRepository


class GroupOrderRepository(BaseRepository[GroupOrder]):
    model = GroupOrder

    async def find_by_key(
        self,
        restaurant_id: int,
        building_id: int,
        delivery_slot: str,
        order_date: date,
    ) -> Optional[GroupOrder]:
        result = await self.session.execute(
            select(GroupOrder).where(
                GroupOrder.restaurant_id == restaurant_id,
                GroupOrder.building_id == building_id,
                GroupOrder.delivery_slot == delivery_slot,
                GroupOrder.order_date == order_date,
            )
        )
        return result.scalar_one_or_none()

    async def find_by_status(self, status: str) -> List[GroupOrder]:
        result = await self.session.execute(
            select(GroupOrder)
            .where(GroupOrder.status == status)
            .order_by(GroupOrder.created_at.desc(), GroupOrder.id.desc())
        )
        return list(result.scalars().all())

    async def find_pending(self) -> List[GroupOrder]:
        return await self.find_by_status(GroupOrderStatus.PENDING_RESTAURANT.value)
