"""Group order model"""

import enum
from datetime import datetime
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, UniqueConstraint, Index

from lunch.database import Base


class GroupOrderStatus(str, enum.Enum):
    PENDING_RESTAURANT = "pending_restaurant"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class GroupOrder(Base):
    """Restaurant-facing aggregate of the pending orders sharing one key"""
    __tablename__ = "group_orders"
    __table_args__ = (
        UniqueConstraint(
            "restaurant_id", "building_id", "delivery_slot", "order_date",
            name="uq_group_orders_key",
        ),
        Index("ix_group_orders_status", "status"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False)
    building_id = Column(Integer, ForeignKey("buildings.id", ondelete="CASCADE"), nullable=False)
    delivery_slot = Column(String(5), nullable=False)
    order_date = Column(Date, nullable=False)
    status = Column(String(50), nullable=False, default=GroupOrderStatus.PENDING_RESTAURANT.value)
    created_at = Column(DateTime, default=datetime.utcnow)
