"""Tests for the slot lobby quorum engine"""

from datetime import date

import pytest
from sqlalchemy import select, func

from lunch.models.lobby import LobbyReservation
from lunch.repositories.lobby import LobbyRepository
from lunch.services.lobby import LobbyQuorumEngine
from tests.conftest import TODAY


@pytest.fixture
def engine(session_factory, slot_config):
    return LobbyQuorumEngine(session_factory, slot_config)


@pytest.mark.asyncio
async def test_add_reservation(engine, test_building, test_restaurant, test_users):
    user = test_users[0]

    added = await engine.add_reservation(test_building.id, test_restaurant.id, "13:00", TODAY, user.id)

    assert added is True
    assert await engine.count_reservations(test_building.id, test_restaurant.id, "13:00", TODAY) == 1
    assert await engine.has_user_reservation(
        user.telegram_user_id, test_building.id, test_restaurant.id, "13:00", TODAY
    )


@pytest.mark.asyncio
async def test_duplicate_reservation_is_noop(engine, test_building, test_restaurant, test_users):
    user = test_users[0]

    await engine.add_reservation(test_building.id, test_restaurant.id, "13:00", TODAY, user.id)
    added_again = await engine.add_reservation(test_building.id, test_restaurant.id, "13:00", TODAY, user.id)

    assert added_again is False
    assert await engine.count_reservations(test_building.id, test_restaurant.id, "13:00", TODAY) == 1


@pytest.mark.asyncio
async def test_remove_reservation(engine, test_building, test_restaurant, test_users):
    user = test_users[0]
    await engine.add_reservation(test_building.id, test_restaurant.id, "13:00", TODAY, user.id)

    assert await engine.remove_reservation(test_building.id, test_restaurant.id, "13:00", TODAY, user.id)
    assert not await engine.remove_reservation(test_building.id, test_restaurant.id, "13:00", TODAY, user.id)

    assert await engine.count_reservations(test_building.id, test_restaurant.id, "13:00", TODAY) == 0
    assert not await engine.has_user_reservation(
        user.telegram_user_id, test_building.id, test_restaurant.id, "13:00", TODAY
    )


@pytest.mark.asyncio
async def test_activation_is_derived_from_count(engine, test_building, test_restaurant, test_users):
    key = (test_building.id, test_restaurant.id, "13:00", TODAY)

    await engine.add_reservation(*key, test_users[0].id)
    assert not await engine.is_activated(*key)

    await engine.add_reservation(*key, test_users[1].id)
    assert await engine.is_activated(*key)

    await engine.remove_reservation(*key, test_users[1].id)
    assert not await engine.is_activated(*key)


@pytest.mark.asyncio
async def test_sweep_cancels_single_participant(
    engine, test_db, test_building, test_restaurant, test_users, make_reservation
):
    await make_reservation(test_users[0], test_restaurant.id, test_building.id)

    cancellations = await engine.sweep_deadlines(now_minutes=631, today=TODAY)

    assert len(cancellations) == 1
    cancellation = cancellations[0]
    assert cancellation.delivery_slot == "13:00"
    assert cancellation.participant_count == 1
    assert cancellation.telegram_user_ids == [test_users[0].telegram_user_id]
    assert await engine.count_reservations(test_building.id, test_restaurant.id, "13:00", TODAY) == 0


@pytest.mark.asyncio
async def test_sweep_keeps_lobby_at_quorum(
    engine, test_building, test_restaurant, test_users, make_reservation
):
    await make_reservation(test_users[0], test_restaurant.id, test_building.id)
    await make_reservation(test_users[1], test_restaurant.id, test_building.id)

    cancellations = await engine.sweep_deadlines(now_minutes=631, today=TODAY)

    assert cancellations == []
    assert await engine.count_reservations(test_building.id, test_restaurant.id, "13:00", TODAY) == 2


@pytest.mark.asyncio
async def test_sweep_with_no_reservations(engine, test_building, test_restaurant):
    assert await engine.sweep_deadlines(now_minutes=1439, today=TODAY) == []


@pytest.mark.asyncio
async def test_sweep_before_deadline_is_noop(
    engine, test_building, test_restaurant, test_users, make_reservation
):
    await make_reservation(test_users[0], test_restaurant.id, test_building.id)

    assert await engine.sweep_deadlines(now_minutes=630, today=TODAY) == []
    assert await engine.count_reservations(test_building.id, test_restaurant.id, "13:00", TODAY) == 1


@pytest.mark.asyncio
async def test_sweep_only_touches_expired_slot_and_today(
    engine, test_db, test_building, test_restaurant, test_users, make_reservation
):
    await make_reservation(test_users[0], test_restaurant.id, test_building.id, "13:00")
    await make_reservation(test_users[1], test_restaurant.id, test_building.id, "18:45")
    await make_reservation(test_users[2], test_restaurant.id, test_building.id, "13:00", date(2026, 2, 11))

    cancellations = await engine.sweep_deadlines(now_minutes=700, today=TODAY)

    assert [c.delivery_slot for c in cancellations] == ["13:00"]

    result = await test_db.execute(select(func.count(LobbyReservation.id)))
    assert result.scalar_one() == 2


@pytest.mark.asyncio
async def test_delete_for_slot_keeps_reservations_added_meanwhile(
    session_factory, test_building, test_restaurant, test_users, make_reservation, monkeypatch
):
    """A reservation landing between the read and the delete is not dropped unnotified"""
    await make_reservation(test_users[0], test_restaurant.id, test_building.id)

    async with session_factory() as session:
        original_execute = session.execute
        calls = []

        async def execute(statement, *args, **kwargs):
            result = await original_execute(statement, *args, **kwargs)
            if not calls:
                calls.append(statement)
                async with session_factory() as other:
                    other.add(LobbyReservation(
                        user_id=test_users[1].id,
                        restaurant_id=test_restaurant.id,
                        building_id=test_building.id,
                        delivery_slot="13:00",
                        order_date=TODAY,
                    ))
                    await other.commit()
            return result

        monkeypatch.setattr(session, "execute", execute)

        telegram_ids = await LobbyRepository(session).delete_for_slot(
            test_building.id, test_restaurant.id, "13:00", TODAY
        )
        await session.commit()

    assert telegram_ids == [test_users[0].telegram_user_id]

    async with session_factory() as session:
        result = await session.execute(select(LobbyReservation.user_id))
        assert result.scalars().all() == [test_users[1].id]
