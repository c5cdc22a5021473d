"""Delivery slot endpoints"""

from fastapi import APIRouter, Depends

from lunch.api.deps import get_clock, get_slot_config
from lunch.clock import Clock
from lunch.schemas.slot import DeliverySlotListResponse, DeliverySlotResponse
from lunch.slots import SlotConfig

router = APIRouter()


@router.get("", response_model=DeliverySlotListResponse)
async def list_delivery_slots(
    clock: Clock = Depends(get_clock),
    slot_config: SlotConfig = Depends(get_slot_config),
):
    """Configured delivery slots with their order deadline"""
    return DeliverySlotListResponse(
        timezone=clock.timezone_id,
        items=[
            DeliverySlotResponse(**slot)
            for slot in slot_config.availability(clock.now_minutes())
        ],
    )
