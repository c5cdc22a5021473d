"""Order queries"""

from datetime import date, datetime
from typing import List, Optional, Tuple

from sqlalchemy import select, and_, or_, func, Date, update

from lunch.models.order import Order, OrderStatus, ACTIVE_ORDER_STATUSES
from lunch.repositories.base import BaseRepository


def _on_date(order_date: date):
    """Match order_date, falling back to date(created_at) for legacy rows"""
    return or_(
        Order.order_date == order_date,
        and_(
            Order.order_date.is_(None),
            func.date(Order.created_at, type_=Date) == order_date,
        ),
    )


class OrderRepository(BaseRepository[Order]):
    model = Order

    async def find_by_user(self, user_id: int) -> List[Order]:
        result = await self.session.execute(
            select(Order).where(Order.user_id == user_id).order_by(Order.created_at.desc())
        )
        return list(result.scalars().all())

    async def find_active_by_user_and_slot(
        self,
        user_id: int,
        building_id: int,
        restaurant_id: int,
        delivery_slot: str,
        order_date: date,
    ) -> Optional[Order]:
        result = await self.session.execute(
            select(Order)
            .where(
                Order.user_id == user_id,
                Order.building_id == building_id,
                Order.restaurant_id == restaurant_id,
                Order.delivery_slot == delivery_slot,
                _on_date(order_date),
                Order.status.in_(ACTIVE_ORDER_STATUSES),
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def find_pending_groups(self, delivery_slot: str, order_date: date) -> List[Tuple[int, int]]:
        """Distinct (restaurant_id, building_id) pairs with pending orders for the slot"""
        result = await self.session.execute(
            select(Order.restaurant_id, Order.building_id)
            .where(
                Order.delivery_slot == delivery_slot,
                Order.status == OrderStatus.PENDING.value,
                _on_date(order_date),
            )
            .distinct()
        )
        return [(row.restaurant_id, row.building_id) for row in result.all()]

    async def find_pending_for_group(
        self,
        delivery_slot: str,
        building_id: int,
        restaurant_id: int,
        order_date: date,
    ) -> List[Order]:
        result = await self.session.execute(
            select(Order)
            .where(
                Order.delivery_slot == delivery_slot,
                Order.building_id == building_id,
                Order.restaurant_id == restaurant_id,
                Order.status == OrderStatus.PENDING.value,
                _on_date(order_date),
            )
            .order_by(Order.created_at, Order.id)
        )
        return list(result.scalars().all())

    async def find_for_group_summary(
        self,
        delivery_slot: str,
        building_id: int,
        restaurant_id: int,
        order_date: date,
    ) -> List[Order]:
        """All non-cancelled orders sharing a group key"""
        result = await self.session.execute(
            select(Order)
            .where(
                Order.delivery_slot == delivery_slot,
                Order.building_id == building_id,
                Order.restaurant_id == restaurant_id,
                Order.status != OrderStatus.CANCELLED.value,
                _on_date(order_date),
            )
            .order_by(Order.created_at.desc())
        )
        return list(result.scalars().all())

    async def update_status(self, order: Order, status: str) -> Order:
        order.status = status
        order.updated_at = datetime.utcnow()
        await self.session.flush()
        return order

    async def set_status_for_group(
        self,
        delivery_slot: str,
        building_id: int,
        restaurant_id: int,
        order_date: date,
        from_status: str,
        to_status: str,
    ) -> int:
        result = await self.session.execute(
            update(Order)
            .where(
                Order.delivery_slot == delivery_slot,
                Order.building_id == building_id,
                Order.restaurant_id == restaurant_id,
                Order.status == from_status,
                _on_date(order_date),
            )
            .values(status=to_status, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
