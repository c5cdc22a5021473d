"""Individual order model"""

import enum
from datetime import datetime
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, JSON, Numeric, Index

from lunch.database import Base


class OrderStatus(str, enum.Enum):
    """Lifecycle of an individual order"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    RESTAURANT_CONFIRMED = "restaurant_confirmed"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


ACTIVE_ORDER_STATUSES = (
    OrderStatus.PENDING.value,
    OrderStatus.CONFIRMED.value,
    OrderStatus.RESTAURANT_CONFIRMED.value,
    OrderStatus.PREPARING.value,
    OrderStatus.READY.value,
)


class Order(Base):
    """A user's lunch order for one restaurant, building and delivery slot"""
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False)
    building_id = Column(Integer, ForeignKey("buildings.id"), nullable=False)

    # Delivery
    delivery_slot = Column(String(5), nullable=False)  # "HH:MM"
    order_date = Column(Date)  # NULL on legacy rows, date(created_at) applies

    # [{"name": "...", "price": 350, "quantity": 1}, ...]
    items = Column(JSON, nullable=False)
    total_price = Column(Numeric(10, 2, asdecimal=False), nullable=False)

    status = Column(String(50), nullable=False, default=OrderStatus.PENDING.value)

    # Metadata
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# At most one active order per user, building, restaurant, slot and day
Index(
    "uq_orders_active_user_slot",
    Order.user_id,
    Order.building_id,
    Order.restaurant_id,
    Order.delivery_slot,
    Order.order_date,
    unique=True,
    postgresql_where=Order.status.in_(ACTIVE_ORDER_STATUSES),
    sqlite_where=Order.status.in_(ACTIVE_ORDER_STATUSES),
)
Index("ix_orders_slot_status", Order.delivery_slot, Order.status, Order.order_date)
