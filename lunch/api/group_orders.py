"""Group order endpoints"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lunch.api.deps import get_clock
from lunch.clock import Clock
from lunch.database import get_db
from lunch.schemas.group_order import GroupOrderResponse, GroupOrderSummary
from lunch.services.errors import GroupOrderResolvedError, NotFoundError
from lunch.services.group_orders import GroupOrderService

router = APIRouter()


@router.get("/pending", response_model=List[GroupOrderResponse])
async def list_pending_group_orders(db: AsyncSession = Depends(get_db)):
    """Group orders waiting for the restaurant"""
    return await GroupOrderService(db).list_pending()


@router.get("/summary", response_model=GroupOrderSummary)
async def get_group_order_summary(
    delivery_slot: str,
    building_id: int,
    restaurant_id: int,
    order_date: Optional[date] = Query(None),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Live orders sharing a slot, building and restaurant"""
    return await GroupOrderService(db).get_summary(
        restaurant_id, building_id, delivery_slot, order_date or clock.today()
    )


@router.post("/{group_order_id}/accept", response_model=GroupOrderResponse)
async def accept_group_order(group_order_id: int, db: AsyncSession = Depends(get_db)):
    """Restaurant accepts the group order"""
    try:
        return await GroupOrderService(db).accept(group_order_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except GroupOrderResolvedError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/{group_order_id}/reject", response_model=GroupOrderResponse)
async def reject_group_order(group_order_id: int, db: AsyncSession = Depends(get_db)):
    """Restaurant rejects the group order"""
    try:
        return await GroupOrderService(db).reject(group_order_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except GroupOrderResolvedError as e:
        raise HTTPException(status_code=409, detail=str(e))
