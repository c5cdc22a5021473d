"""Background job tasks"""

import asyncio
import structlog

from lunch.jobs.celery_app import celery_app

logger = structlog.get_logger()


def run_async(coro):
    """Helper to run async functions in sync context"""
    return asyncio.run(coro)


@celery_app.task(name="run_deadline_tick")
def run_deadline_tick():
    """Run one lobby sweep and aggregation pass"""

    async def _tick():
        from lunch.database import engine
        from lunch.services.scheduler import build_scheduler

        try:
            result = await build_scheduler().run_tick()
        finally:
            # Pooled connections are bound to this event loop
            await engine.dispose()

        if result is None:
            return {"skipped": True}

        logger.info(
            "Deadline tick finished",
            lobbies_cancelled=len(result.cancellations),
            group_orders_created=len(result.group_orders),
        )
        return {
            "lobbies_cancelled": len(result.cancellations),
            "group_orders_created": [n.group_order_id for n in result.group_orders],
        }

    return run_async(_tick())
