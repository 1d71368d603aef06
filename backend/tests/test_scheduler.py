from datetime import datetime, timezone

from fpl_dashboard.core.errors import AlreadyInProgress, UpstreamUnavailable
from fpl_dashboard.services import scheduler as scheduler_module
from fpl_dashboard.services.scheduler import next_refresh_time, scheduled_refresh


def test_next_refresh_is_monday_evening_utc():
    # Saturday
    now = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)
    assert next_refresh_time(now) == datetime(2026, 10, 19, 18, 31, tzinfo=timezone.utc)


def test_next_refresh_after_monday_slot_moves_a_week():
    now = datetime(2026, 10, 19, 18, 45, tzinfo=timezone.utc)
    assert next_refresh_time(now) == datetime(2026, 10, 26, 18, 31, tzinfo=timezone.utc)


def test_scheduled_job_swallows_failures(session_factory, monkeypatch):
    for exc in (UpstreamUnavailable("down"), AlreadyInProgress("busy"), RuntimeError("bug")):
        def failing(db, **kwargs):
            raise exc

        monkeypatch.setattr(scheduler_module, "refresh_snapshot", failing)
        scheduled_refresh(session_factory)


def test_scheduled_job_uses_scheduled_trigger(session_factory, monkeypatch):
    seen = {}

    class Result:
        players_updated = 0
        gameweek_id = 1

    def fake(db, **kwargs):
        seen.update(kwargs)
        return Result()

    monkeypatch.setattr(scheduler_module, "refresh_snapshot", fake)
    scheduled_refresh(session_factory)
    assert seen == {"trigger": "scheduled"}


def test_start_scheduler_respects_disabled_flag():
    # conftest sets SCHEDULER_ENABLED=false
    scheduler_module.start_scheduler()
    assert not scheduler_module.scheduler.running
