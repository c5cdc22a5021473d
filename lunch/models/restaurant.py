"""Restaurant and building models"""

from datetime import datetime
from sqlalchemy import Column, Integer, BigInteger, String, DateTime, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from lunch.database import Base


class Restaurant(Base):
    """Restaurant receiving group orders in its chat"""
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    chat_id = Column(BigInteger, unique=True, nullable=False)  # Telegram chat of the restaurant side
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    buildings = relationship("RestaurantBuilding", back_populates="restaurant")


class Building(Base):
    """Office building deliveries go to"""
    __tablename__ = "buildings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    address = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    restaurants = relationship("RestaurantBuilding", back_populates="building")


class RestaurantBuilding(Base):
    """Which restaurants deliver to which building"""
    __tablename__ = "restaurant_buildings"
    __table_args__ = (
        UniqueConstraint("restaurant_id", "building_id", name="uq_restaurant_building"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False)
    building_id = Column(Integer, ForeignKey("buildings.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    restaurant = relationship("Restaurant", back_populates="buildings")
    building = relationship("Building", back_populates="restaurants")
