"""Order endpoints"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lunch.api.deps import get_clock, get_slot_config
from lunch.clock import Clock
from lunch.database import get_db
from lunch.schemas.order import OrderCreate, OrderResponse, OrderStatusUpdate
from lunch.services.errors import (
    ActiveOrderExistsError,
    InvalidStatusError,
    NotFoundError,
    OrderNotCancellableError,
    SlotClosedError,
    UnknownSlotError,
)
from lunch.services.orders import OrderService
from lunch.slots import SlotConfig

router = APIRouter()


def get_order_service(
    db: AsyncSession = Depends(get_db),
    slot_config: SlotConfig = Depends(get_slot_config),
    clock: Clock = Depends(get_clock),
) -> OrderService:
    return OrderService(db, slot_config, clock)


@router.post("", response_model=OrderResponse, status_code=201)
async def create_order(
    order_data: OrderCreate,
    service: OrderService = Depends(get_order_service),
):
    """Place an order for today's delivery slot"""
    try:
        order = await service.create_order(order_data)
    except (UnknownSlotError, SlotClosedError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ActiveOrderExistsError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return order


@router.get("/active", response_model=Optional[OrderResponse])
async def get_active_order(
    user_id: int,
    building_id: int,
    restaurant_id: int,
    delivery_slot: str,
    order_date: Optional[date] = Query(None),
    service: OrderService = Depends(get_order_service),
):
    """The user's active order for a slot, or null"""
    return await service.find_active_by_user_and_slot(
        user_id, building_id, restaurant_id, delivery_slot, order_date
    )


@router.get("/user/{user_id}", response_model=List[OrderResponse])
async def list_user_orders(
    user_id: int,
    service: OrderService = Depends(get_order_service),
):
    """All orders of a user, newest first"""
    return await service.list_user_orders(user_id)


@router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: int,
    update: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service),
):
    """Move an order to another status"""
    try:
        return await service.update_status(order_id, update.status)
    except InvalidStatusError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ActiveOrderExistsError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/{order_id}", response_model=OrderResponse)
async def cancel_order(
    order_id: int,
    service: OrderService = Depends(get_order_service),
):
    """Cancel a pending order"""
    try:
        return await service.cancel_order(order_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except OrderNotCancellableError as e:
        raise HTTPException(status_code=400, detail=str(e))
