"""Test configuration and fixtures"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["TELEGRAM_BOT_TOKEN"] = ""
os.environ["DEFAULT_TIMEZONE"] = "Europe/Moscow"

from datetime import date, datetime
from typing import List, Optional

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from lunch.clock import FixedClock
from lunch.config import DeliverySlot
from lunch.database import Base, get_db
from lunch.models.restaurant import Restaurant, Building, RestaurantBuilding
from lunch.models.user import User
from lunch.models.order import Order
from lunch.models.lobby import LobbyReservation
from lunch.notifications.base import NotificationSink
from lunch.schemas.group_order import GroupOrderNotification
from lunch.slots import SlotConfig

import lunch.models  # noqa: F401

TODAY = date(2026, 2, 10)


class RecordingSink(NotificationSink):
    """Notification sink that remembers every call"""

    def __init__(self, fail_group_orders: bool = False):
        self.group_orders: List[GroupOrderNotification] = []
        self.lobby_cancellations: List[tuple] = []
        self.fail_group_orders = fail_group_orders

    async def send_group_order(self, notification: GroupOrderNotification) -> None:
        self.group_orders.append(notification)
        if self.fail_group_orders:
            raise RuntimeError("restaurant chat unreachable")

    async def notify_lobby_cancelled(self, telegram_user_id: int, slot_time: str) -> None:
        self.lobby_cancellations.append((telegram_user_id, slot_time))


@pytest.fixture
async def session_factory(tmp_path):
    """File-backed SQLite database so separate sessions see each other's commits"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def test_db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def clock():
    """Frozen at 10:00 local time on TODAY"""
    return FixedClock(TODAY, 10 * 60)


@pytest.fixture
def slot_config():
    return SlotConfig(
        slots=[
            DeliverySlot(id="13:00", time="13:00"),
            DeliverySlot(id="18:45", time="18:45"),
        ],
        order_lead_minutes=150,
        lobby_lead_minutes=150,
        min_lobby_participants=2,
    )


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
async def test_building(test_db):
    building = Building(name="Coworking", address="1 Test Street")
    test_db.add(building)
    await test_db.commit()
    return building


@pytest.fixture
async def test_restaurant(test_db, test_building):
    restaurant = Restaurant(name="Trattoria", chat_id=555001)
    test_db.add(restaurant)
    await test_db.flush()

    test_db.add(RestaurantBuilding(restaurant_id=restaurant.id, building_id=test_building.id))
    await test_db.commit()
    return restaurant


@pytest.fixture
async def test_users(test_db, test_building):
    users = [
        User(telegram_user_id=401 + i, username=f"user{i}", building_id=test_building.id)
        for i in range(3)
    ]
    test_db.add_all(users)
    await test_db.commit()
    return users


@pytest.fixture
def make_order(test_db):
    """Insert an order row directly"""

    async def _make_order(
        user: User,
        restaurant_id: int,
        building_id: int,
        delivery_slot: str = "13:00",
        total_price: float = 100,
        status: str = "pending",
        order_date: Optional[date] = TODAY,
        created_at: Optional[datetime] = None,
    ) -> Order:
        order = Order(
            user_id=user.id,
            restaurant_id=restaurant_id,
            building_id=building_id,
            delivery_slot=delivery_slot,
            order_date=order_date,
            items=[{"name": "Soup", "price": total_price, "quantity": 1}],
            total_price=total_price,
            status=status,
        )
        if created_at is not None:
            order.created_at = created_at
        test_db.add(order)
        await test_db.commit()
        return order

    return _make_order


@pytest.fixture
def make_reservation(test_db):
    """Insert a lobby reservation row directly"""

    async def _make_reservation(
        user: User,
        restaurant_id: int,
        building_id: int,
        delivery_slot: str = "13:00",
        order_date: date = TODAY,
    ) -> LobbyReservation:
        reservation = LobbyReservation(
            user_id=user.id,
            restaurant_id=restaurant_id,
            building_id=building_id,
            delivery_slot=delivery_slot,
            order_date=order_date,
        )
        test_db.add(reservation)
        await test_db.commit()
        return reservation

    return _make_reservation


@pytest.fixture
async def client(session_factory, clock, slot_config):
    """Create test client with overridden database, clock and slots"""
    from lunch.main import app
    from lunch.api.deps import get_clock, get_slot_config, get_session_factory

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_slot_config] = lambda: slot_config

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
