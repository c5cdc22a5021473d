"""Slot lobby reservation model"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, UniqueConstraint, Index

from lunch.database import Base


class LobbyReservation(Base):
    """A user's place in a delivery slot lobby before ordering"""
    __tablename__ = "slot_lobby_reservations"
    __table_args__ = (
        UniqueConstraint(
            "building_id", "restaurant_id", "delivery_slot", "order_date", "user_id",
            name="uq_slot_lobby_user",
        ),
        Index("ix_slot_lobby_slot", "building_id", "restaurant_id", "delivery_slot", "order_date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    building_id = Column(Integer, ForeignKey("buildings.id", ondelete="CASCADE"), nullable=False)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False)
    delivery_slot = Column(String(5), nullable=False)
    order_date = Column(Date, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
