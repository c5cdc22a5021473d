"""Slot lobby endpoints"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lunch.api.deps import get_clock, get_lobby_engine, get_slot_config
from lunch.clock import Clock
from lunch.database import get_db
from lunch.repositories.restaurants import UserRepository
from lunch.schemas.lobby import LobbyChangeResponse, LobbyReservationRequest, LobbyStatusResponse
from lunch.services.lobby import LobbyQuorumEngine
from lunch.slots import SlotConfig, format_minutes

router = APIRouter()


async def _lobby_status(
    engine: LobbyQuorumEngine,
    slot_config: SlotConfig,
    building_id: int,
    restaurant_id: int,
    delivery_slot: str,
    order_date: date,
    telegram_user_id: Optional[int] = None,
) -> LobbyStatusResponse:
    count = await engine.count_reservations(building_id, restaurant_id, delivery_slot, order_date)

    user_reserved = None
    if telegram_user_id is not None:
        user_reserved = await engine.has_user_reservation(
            telegram_user_id, building_id, restaurant_id, delivery_slot, order_date
        )

    return LobbyStatusResponse(
        building_id=building_id,
        restaurant_id=restaurant_id,
        delivery_slot=delivery_slot,
        order_date=order_date,
        participant_count=count,
        min_participants=engine.min_participants,
        is_activated=count >= engine.min_participants,
        lobby_deadline=format_minutes(slot_config.lobby_deadline(delivery_slot)),
        user_reserved=user_reserved,
    )


async def _resolve_user_id(db: AsyncSession, telegram_user_id: int) -> int:
    user = await UserRepository(db).find_by_telegram_id(telegram_user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user.id


def _check_slot(slot_config: SlotConfig, delivery_slot: str) -> None:
    if slot_config.get(delivery_slot) is None:
        raise HTTPException(status_code=400, detail=f"Unknown delivery slot: {delivery_slot}")


@router.post("/reservations", response_model=LobbyChangeResponse)
async def join_lobby(
    request: LobbyReservationRequest,
    db: AsyncSession = Depends(get_db),
    engine: LobbyQuorumEngine = Depends(get_lobby_engine),
    slot_config: SlotConfig = Depends(get_slot_config),
    clock: Clock = Depends(get_clock),
):
    """Reserve a place in a slot lobby. Joining twice is a no-op."""
    _check_slot(slot_config, request.delivery_slot)

    order_date = request.order_date or clock.today()
    if order_date == clock.today() and slot_config.is_lobby_deadline_passed(
        request.delivery_slot, clock.now_minutes()
    ):
        raise HTTPException(status_code=400, detail="Lobby for this slot is closed")

    user_id = await _resolve_user_id(db, request.telegram_user_id)
    changed = await engine.add_reservation(
        request.building_id, request.restaurant_id, request.delivery_slot, order_date, user_id
    )

    status = await _lobby_status(
        engine, slot_config, request.building_id, request.restaurant_id,
        request.delivery_slot, order_date, request.telegram_user_id,
    )
    return LobbyChangeResponse(changed=changed, status=status)


@router.delete("/reservations", response_model=LobbyChangeResponse)
async def leave_lobby(
    request: LobbyReservationRequest,
    db: AsyncSession = Depends(get_db),
    engine: LobbyQuorumEngine = Depends(get_lobby_engine),
    slot_config: SlotConfig = Depends(get_slot_config),
    clock: Clock = Depends(get_clock),
):
    """Leave a slot lobby. Leaving when not reserved is a no-op."""
    _check_slot(slot_config, request.delivery_slot)

    order_date = request.order_date or clock.today()
    user_id = await _resolve_user_id(db, request.telegram_user_id)
    changed = await engine.remove_reservation(
        request.building_id, request.restaurant_id, request.delivery_slot, order_date, user_id
    )

    status = await _lobby_status(
        engine, slot_config, request.building_id, request.restaurant_id,
        request.delivery_slot, order_date, request.telegram_user_id,
    )
    return LobbyChangeResponse(changed=changed, status=status)


@router.get("/status", response_model=LobbyStatusResponse)
async def get_lobby_status(
    building_id: int,
    restaurant_id: int,
    delivery_slot: str,
    order_date: Optional[date] = Query(None),
    telegram_user_id: Optional[int] = Query(None),
    engine: LobbyQuorumEngine = Depends(get_lobby_engine),
    slot_config: SlotConfig = Depends(get_slot_config),
    clock: Clock = Depends(get_clock),
):
    """Participant count and activation state of a slot lobby"""
    _check_slot(slot_config, delivery_slot)

    return await _lobby_status(
        engine, slot_config, building_id, restaurant_id, delivery_slot,
        order_date or clock.today(), telegram_user_id,
    )
