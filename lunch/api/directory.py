"""Building, restaurant and user endpoints"""

from typing import List

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from lunch.database import get_db
from lunch.repositories.restaurants import BuildingRepository, RestaurantRepository, UserRepository
from lunch.schemas.directory import (
    BuildingResponse,
    RestaurantResponse,
    UserBuildingUpdate,
    UserCreate,
    UserResponse,
)

logger = structlog.get_logger()

buildings_router = APIRouter()
restaurants_router = APIRouter()
users_router = APIRouter()


@buildings_router.get("", response_model=List[BuildingResponse])
async def list_buildings(db: AsyncSession = Depends(get_db)):
    """All office buildings"""
    return await BuildingRepository(db).find_all()


@buildings_router.get("/{building_id}", response_model=BuildingResponse)
async def get_building(building_id: int, db: AsyncSession = Depends(get_db)):
    building = await BuildingRepository(db).get_by_id(building_id)
    if not building:
        raise HTTPException(status_code=404, detail="Building not found")
    return building


@restaurants_router.get("", response_model=List[RestaurantResponse])
async def list_restaurants(building_id: int, db: AsyncSession = Depends(get_db)):
    """Restaurants delivering to a building"""
    return await RestaurantRepository(db).find_by_building(building_id)


@users_router.get("/{telegram_user_id}", response_model=UserResponse)
async def get_user(telegram_user_id: int, db: AsyncSession = Depends(get_db)):
    user = await UserRepository(db).find_by_telegram_id(telegram_user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@users_router.post("", response_model=UserResponse)
async def register_user(user_data: UserCreate, db: AsyncSession = Depends(get_db)):
    """Find the user by Telegram id or create them. An existing user is returned unchanged."""
    users = UserRepository(db)

    existing = await users.find_by_telegram_id(user_data.telegram_user_id)
    if existing:
        return existing

    if user_data.building_id is not None and not await BuildingRepository(db).get_by_id(user_data.building_id):
        raise HTTPException(status_code=404, detail="Building not found")

    try:
        user = await users.create(user_data.model_dump())
        await db.commit()
    except IntegrityError:
        # Registered concurrently
        await db.rollback()
        return await users.find_by_telegram_id(user_data.telegram_user_id)

    logger.info("User registered", user_id=user.id, telegram_user_id=user.telegram_user_id)
    return user


@users_router.put("/{telegram_user_id}/building", response_model=UserResponse)
async def update_user_building(
    telegram_user_id: int,
    update: UserBuildingUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Move the user to another building"""
    user = await UserRepository(db).find_by_telegram_id(telegram_user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    if not await BuildingRepository(db).get_by_id(update.building_id):
        raise HTTPException(status_code=404, detail="Building not found")

    user.building_id = update.building_id
    await db.commit()

    logger.info("User building updated", user_id=user.id, building_id=update.building_id)
    return user
