"""Celery application configuration"""

from celery import Celery
from celery.signals import setup_logging
from lunch.config import settings
from lunch.log import configure_logging

# Create Celery app
celery_app = Celery(
    "office_lunch",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=[
        "lunch.jobs.tasks",
    ],
)

# Configure Celery
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone=settings.default_timezone,
    enable_utc=True,
    task_track_started=True,
    task_time_limit=300,  # 5 minutes
    worker_prefetch_multiplier=1,

    # Beat drives the same idempotent tick as the in-process scheduler
    beat_schedule={
        "run-deadline-tick": {
            "task": "run_deadline_tick",
            "schedule": settings.scheduler_interval_seconds,
        },
    },
)


@setup_logging.connect
def _configure_worker_logging(**kwargs):
    configure_logging()
