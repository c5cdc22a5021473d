"""Shared FastAPI dependencies"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lunch.clock import Clock
from lunch.database import SessionLocal
from lunch.services.lobby import LobbyQuorumEngine
from lunch.slots import SlotConfig


def get_clock() -> Clock:
    return Clock()


def get_slot_config() -> SlotConfig:
    return SlotConfig.from_settings()


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return SessionLocal


def get_lobby_engine(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    slot_config: SlotConfig = Depends(get_slot_config),
) -> LobbyQuorumEngine:
    return LobbyQuorumEngine(session_factory, slot_config)
