"""Tests for the Celery deadline task"""

from datetime import date

from lunch.schemas.group_order import GroupOrderNotification
from lunch.services.lobby import LobbyCancellation
from lunch.services.scheduler import TickResult


class _FakeScheduler:
    def __init__(self, result):
        self.result = result

    async def run_tick(self):
        return self.result


def test_run_deadline_tick_reports_counts(monkeypatch):
    from lunch.jobs.tasks import run_deadline_tick

    result = TickResult(
        cancellations=[
            LobbyCancellation(
                building_id=1,
                restaurant_id=1,
                delivery_slot="13:00",
                slot_time="13:00",
                order_date=date(2026, 2, 10),
                participant_count=1,
                telegram_user_ids=[401],
            )
        ],
        group_orders=[
            GroupOrderNotification(
                restaurant_chat_id=555001,
                restaurant_name="Trattoria",
                building_name="Coworking",
                delivery_slot="18:45",
                group_order_id=5,
                orders=[],
                total_amount=0,
                participant_count=0,
            )
        ],
    )
    monkeypatch.setattr("lunch.services.scheduler.build_scheduler", lambda: _FakeScheduler(result))

    assert run_deadline_tick() == {"lobbies_cancelled": 1, "group_orders_created": [5]}


def test_run_deadline_tick_skipped(monkeypatch):
    from lunch.jobs.tasks import run_deadline_tick

    monkeypatch.setattr("lunch.services.scheduler.build_scheduler", lambda: _FakeScheduler(None))

    assert run_deadline_tick() == {"skipped": True}
