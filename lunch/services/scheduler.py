"""Periodic driver for slot deadlines"""

import asyncio
from typing import List, Optional

import structlog
from pydantic import BaseModel, Field

from lunch.clock import Clock
from lunch.notifications.base import NotificationSink
from lunch.schemas.group_order import GroupOrderNotification
from lunch.services.aggregation import OrderAggregationEngine
from lunch.services.lobby import LobbyCancellation, LobbyQuorumEngine

logger = structlog.get_logger()


class TickResult(BaseModel):
    """What one tick changed"""
    cancellations: List[LobbyCancellation] = Field(default_factory=list)
    group_orders: List[GroupOrderNotification] = Field(default_factory=list)


class DeadlineScheduler:
    """
    Runs the lobby sweep and then the aggregation sweep on a fixed interval,
    once immediately at start.

    Nothing is kept in memory between ticks. Each sweep logs and swallows
    its own errors so the loop keeps running. Notifications are best-effort,
    each bounded by notification_timeout.
    """

    def __init__(
        self,
        lobby_engine: LobbyQuorumEngine,
        aggregation_engine: OrderAggregationEngine,
        sink: NotificationSink,
        clock: Clock,
        interval_seconds: float = 60.0,
        notification_timeout: float = 10.0,
    ):
        self.lobby_engine = lobby_engine
        self.aggregation_engine = aggregation_engine
        self.sink = sink
        self.clock = clock
        self.interval_seconds = interval_seconds
        self.notification_timeout = notification_timeout

        self._lock = asyncio.Lock()
        self._stopped = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        if self.running:
            return self._task

        self._stopped.clear()
        self._task = asyncio.create_task(self._run_forever(), name="deadline-scheduler")
        logger.info("Deadline scheduler started", interval_seconds=self.interval_seconds)
        return self._task

    def stop(self) -> None:
        """Stop scheduling new ticks. A tick already in progress runs to completion."""
        self._stopped.set()
        logger.info("Deadline scheduler stopped")

    async def _run_forever(self) -> None:
        while not self._stopped.is_set():
            await self.run_tick()
            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                pass

    async def run_tick(self) -> Optional[TickResult]:
        """One pass: lobby sweep, then aggregation. Returns None if a tick is already running."""
        if self._lock.locked():
            logger.warning("Deadline tick still running, skipping")
            return None

        async with self._lock:
            result = TickResult()
            try:
                result.cancellations = await self.run_lobby_sweep()
                result.group_orders = await self.run_aggregation()
            except Exception:
                logger.exception("Deadline tick failed")
            return result

    async def run_lobby_sweep(self) -> List[LobbyCancellation]:
        try:
            cancellations = await self.lobby_engine.sweep_deadlines(
                self.clock.now_minutes(), self.clock.today()
            )
        except Exception as e:
            logger.error("Lobby sweep failed", error=str(e))
            return []

        for cancellation in cancellations:
            for telegram_user_id in cancellation.telegram_user_ids:
                await self._deliver(
                    self.sink.notify_lobby_cancelled(telegram_user_id, cancellation.slot_time),
                    "Failed to notify about lobby cancellation",
                    telegram_user_id=telegram_user_id,
                    slot=cancellation.delivery_slot,
                )

        return cancellations

    async def run_aggregation(self) -> List[GroupOrderNotification]:
        try:
            created = await self.aggregation_engine.aggregate(
                self.clock.now_minutes(), self.clock.today()
            )
        except Exception as e:
            logger.error("Aggregation sweep failed", error=str(e))
            return []

        for notification in created:
            await self._deliver(
                self.sink.send_group_order(notification),
                "Failed to send group order to restaurant",
                group_order_id=notification.group_order_id,
                restaurant_chat_id=notification.restaurant_chat_id,
            )

        return created

    async def _deliver(self, coro, failure_message: str, **context) -> bool:
        try:
            await asyncio.wait_for(coro, timeout=self.notification_timeout)
            return True
        except Exception as e:
            logger.error(failure_message, error=repr(e), **context)
            return False


def build_scheduler(session_factory=None, sink: Optional[NotificationSink] = None, clock: Optional[Clock] = None) -> DeadlineScheduler:
    """Wire the scheduler from application settings"""
    from lunch.config import settings
    from lunch.notifications import get_notification_sink
    from lunch.slots import SlotConfig

    if session_factory is None:
        from lunch.database import SessionLocal
        session_factory = SessionLocal

    slot_config = SlotConfig.from_settings()

    return DeadlineScheduler(
        lobby_engine=LobbyQuorumEngine(session_factory, slot_config),
        aggregation_engine=OrderAggregationEngine(session_factory, slot_config),
        sink=sink or get_notification_sink(),
        clock=clock or Clock(),
        interval_seconds=settings.scheduler_interval_seconds,
        notification_timeout=settings.notification_timeout_seconds,
    )
