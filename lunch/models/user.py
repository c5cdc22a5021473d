"""User model"""

from datetime import datetime
from sqlalchemy import Column, Integer, BigInteger, String, DateTime, ForeignKey

from lunch.database import Base


class User(Base):
    """End user, identified externally by their Telegram account"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    telegram_user_id = Column(BigInteger, unique=True, nullable=False)

    # Profile
    username = Column(String(255))
    first_name = Column(String(255))
    last_name = Column(String(255))

    building_id = Column(Integer, ForeignKey("buildings.id", ondelete="SET NULL"))

    created_at = Column(DateTime, default=datetime.utcnow)
