"""Background scheduler for the weekly snapshot refresh."""
import logging
import os
from datetime import datetime, timezone
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from fpl_dashboard.core.config import settings
from fpl_dashboard.core.errors import AlreadyInProgress, SnapshotError
from fpl_dashboard.db.session import SessionLocal
from fpl_dashboard.services.refresh import TRIGGER_SCHEDULED, refresh_snapshot

logger = logging.getLogger(__name__)

JOB_ID = "weekly_snapshot_refresh"

scheduler = BackgroundScheduler(timezone=settings.REFRESH_TIMEZONE)
_scheduler_started = False


def weekly_trigger() -> CronTrigger:
    return CronTrigger(
        day_of_week=settings.REFRESH_DAY_OF_WEEK,
        hour=settings.REFRESH_HOUR,
        minute=settings.REFRESH_MINUTE,
        timezone=settings.REFRESH_TIMEZONE,
    )


def scheduled_refresh(session_factory=SessionLocal) -> None:
    """Job body. Logs every failure; never raises into the scheduler thread."""
    db = session_factory()
    try:
        result = refresh_snapshot(db, trigger=TRIGGER_SCHEDULED)
        logger.info(
            "Scheduled refresh done: %d players for gameweek %s",
            result.players_updated,
            result.gameweek_id,
        )
    except AlreadyInProgress as e:
        logger.warning("Scheduled refresh skipped: %s", e)
    except SnapshotError as e:
        logger.error("Scheduled refresh failed: %s", e)
    except Exception:
        logger.exception("Scheduled refresh crashed")
    finally:
        db.close()


def start_scheduler() -> None:
    """Start the background scheduler once per process."""
    global _scheduler_started

    if _scheduler_started:
        logger.warning("Scheduler already started, skipping duplicate initialization")
        return

    if not settings.SCHEDULER_ENABLED:
        logger.info("Scheduler disabled (SCHEDULER_ENABLED=false)")
        return

    # Uvicorn sets this in the reloader subprocess
    if os.environ.get("UVICORN_RELOADED"):
        logger.info("Skipping scheduler in reload subprocess")
        return

    scheduler.add_job(
        scheduled_refresh,
        trigger=weekly_trigger(),
        id=JOB_ID,
        name="Weekly FPL snapshot refresh",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
        misfire_grace_time=3600,
    )
    scheduler.start()
    _scheduler_started = True

    logger.info(
        "Scheduler started: refresh every %s at %02d:%02d %s (next run %s)",
        settings.REFRESH_DAY_OF_WEEK,
        settings.REFRESH_HOUR,
        settings.REFRESH_MINUTE,
        settings.REFRESH_TIMEZONE,
        next_refresh_time(),
    )


def stop_scheduler() -> None:
    global _scheduler_started
    if _scheduler_started:
        scheduler.shutdown(wait=False)
        _scheduler_started = False
        logger.info("Scheduler stopped")


def next_refresh_time(now: Optional[datetime] = None) -> Optional[datetime]:
    job = scheduler.get_job(JOB_ID) if _scheduler_started else None
    if job is not None:
        return job.next_run_time
    # Not running (tests, SCHEDULER_ENABLED=false): ask the trigger directly
    now = now or datetime.now(timezone.utc)
    return weekly_trigger().get_next_fire_time(None, now)
