"""Tests for the deadline scheduler tick"""

import asyncio

import pytest
from sqlalchemy import select

from lunch.clock import FixedClock
from lunch.models.group_order import GroupOrder
from lunch.models.order import Order
from lunch.models.restaurant import Building, Restaurant, RestaurantBuilding
from lunch.services.aggregation import OrderAggregationEngine
from lunch.services.lobby import LobbyQuorumEngine
from lunch.services.scheduler import DeadlineScheduler
from tests.conftest import RecordingSink, TODAY


def _scheduler(session_factory, slot_config, sink, clock, **kwargs):
    return DeadlineScheduler(
        lobby_engine=LobbyQuorumEngine(session_factory, slot_config),
        aggregation_engine=OrderAggregationEngine(session_factory, slot_config),
        sink=sink,
        clock=clock,
        **kwargs,
    )


@pytest.fixture
async def evening_key(test_db):
    """Restaurant 7 delivering to building 3"""
    building = Building(id=3, name="Tower B")
    restaurant = Restaurant(id=7, name="Pho House", chat_id=700007)
    test_db.add_all([building, restaurant])
    await test_db.flush()
    test_db.add(RestaurantBuilding(restaurant_id=7, building_id=3))
    await test_db.commit()
    return restaurant, building


@pytest.mark.asyncio
async def test_tick_creates_and_sends_group_order(
    session_factory, slot_config, sink, evening_key, test_users, make_order
):
    """Two 18:45 orders, one minute after the 16:15 deadline"""
    await make_order(test_users[0], 7, 3, delivery_slot="18:45", total_price=320)
    await make_order(test_users[1], 7, 3, delivery_slot="18:45", total_price=280)

    scheduler = _scheduler(session_factory, slot_config, sink, FixedClock(TODAY, 16 * 60 + 16))
    result = await scheduler.run_tick()

    assert len(result.group_orders) == 1
    assert len(sink.group_orders) == 1
    sent = sink.group_orders[0]
    assert sent.restaurant_chat_id == 700007
    assert sent.delivery_slot == "18:45"
    assert sent.participant_count == 2
    assert sent.total_amount == 600

    # Second tick is a no-op
    result = await scheduler.run_tick()
    assert result.group_orders == []
    assert len(sink.group_orders) == 1


@pytest.mark.asyncio
async def test_tick_at_deadline_does_nothing(
    session_factory, slot_config, sink, evening_key, test_users, make_order
):
    await make_order(test_users[0], 7, 3, delivery_slot="18:45")

    scheduler = _scheduler(session_factory, slot_config, sink, FixedClock(TODAY, 16 * 60 + 15))
    result = await scheduler.run_tick()

    assert result.group_orders == []
    assert sink.group_orders == []


@pytest.mark.asyncio
async def test_failed_notification_keeps_group_order(
    session_factory, slot_config, evening_key, test_users, make_order
):
    await make_order(test_users[0], 7, 3, delivery_slot="18:45")
    sink = RecordingSink(fail_group_orders=True)

    scheduler = _scheduler(session_factory, slot_config, sink, FixedClock(TODAY, 1000))
    result = await scheduler.run_tick()

    assert len(result.group_orders) == 1
    assert len(sink.group_orders) == 1

    async with session_factory() as session:
        group_orders = (await session.execute(select(GroupOrder))).scalars().all()
        orders = (await session.execute(select(Order))).scalars().all()
    assert len(group_orders) == 1
    assert [o.status for o in orders] == ["pending"]

    # Not resent on the next tick
    await scheduler.run_tick()
    assert len(sink.group_orders) == 1


@pytest.mark.asyncio
async def test_slow_notification_times_out(
    session_factory, slot_config, evening_key, test_users, make_order
):
    class SlowSink(RecordingSink):
        async def send_group_order(self, notification):
            await asyncio.sleep(10)

    await make_order(test_users[0], 7, 3, delivery_slot="18:45")

    scheduler = _scheduler(
        session_factory, slot_config, SlowSink(), FixedClock(TODAY, 1000),
        notification_timeout=0.05,
    )
    result = await asyncio.wait_for(scheduler.run_tick(), timeout=5)

    assert len(result.group_orders) == 1


@pytest.mark.asyncio
async def test_tick_notifies_cancelled_lobby_members(
    session_factory, slot_config, sink, test_building, test_restaurant, test_users, make_reservation
):
    await make_reservation(test_users[0], test_restaurant.id, test_building.id, "13:00")

    scheduler = _scheduler(session_factory, slot_config, sink, FixedClock(TODAY, 631))
    result = await scheduler.run_tick()

    assert len(result.cancellations) == 1
    assert sink.lobby_cancellations == [(test_users[0].telegram_user_id, "13:00")]


@pytest.mark.asyncio
async def test_lobby_sweep_failure_does_not_stop_aggregation(
    session_factory, slot_config, sink, evening_key, test_users, make_order, monkeypatch
):
    await make_order(test_users[0], 7, 3, delivery_slot="18:45")
    scheduler = _scheduler(session_factory, slot_config, sink, FixedClock(TODAY, 1000))

    async def broken(now_minutes, today):
        raise RuntimeError("lobby table locked")

    monkeypatch.setattr(scheduler.lobby_engine, "sweep_deadlines", broken)

    result = await scheduler.run_tick()

    assert result.cancellations == []
    assert len(sink.group_orders) == 1


@pytest.mark.asyncio
async def test_overlapping_tick_is_skipped(session_factory, slot_config, sink, clock):
    scheduler = _scheduler(session_factory, slot_config, sink, clock)

    async with scheduler._lock:
        assert await scheduler.run_tick() is None

    assert await scheduler.run_tick() is not None


@pytest.mark.asyncio
async def test_start_runs_first_tick_immediately(
    session_factory, slot_config, sink, evening_key, test_users, make_order
):
    await make_order(test_users[0], 7, 3, delivery_slot="18:45")

    scheduler = _scheduler(
        session_factory, slot_config, sink, FixedClock(TODAY, 1000), interval_seconds=3600
    )
    task = scheduler.start()
    assert scheduler.running

    for _ in range(100):
        if sink.group_orders:
            break
        await asyncio.sleep(0.02)

    scheduler.stop()
    await asyncio.wait_for(task, timeout=5)

    assert not scheduler.running
    assert len(sink.group_orders) == 1
