"""Weekly snapshot refresh: fetch the feed, normalize it, replace the snapshot atomically."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fpl_dashboard.clients.fpl import fetch_snapshot
from fpl_dashboard.core.config import settings
from fpl_dashboard.core.errors import (
    AlreadyInProgress,
    SnapshotError,
    StoreWriteFailed,
    UpstreamMalformed,
)
from fpl_dashboard.crud.crud_players import upsert_gameweek_players, upsert_players
from fpl_dashboard.crud.crud_reference import upsert_gameweeks, upsert_positions, upsert_teams
from fpl_dashboard.models.refresh_runs import STATUS_FAILED, STATUS_SUCCESS, RefreshRun
from fpl_dashboard.schemas.feed import FeedEvent, RawFeed
from fpl_dashboard.services.refresh_lock import ADVISORY_LOCK_KEY, refresh_guard

logger = logging.getLogger(__name__)

TRIGGER_SCHEDULED = "scheduled"
TRIGGER_MANUAL = "manual"
TRIGGER_FEED = "feed"


@dataclass(frozen=True)
class RefreshResult:
    players_updated: int
    gameweek_id: int
    started_at: datetime
    finished_at: datetime


def select_active_gameweek(events: list[FeedEvent]) -> FeedEvent:
    """Current gameweek, else the next one, else the first event of the feed."""
    if not events:
        raise UpstreamMalformed("feed has no events, cannot tag gameweek rows")
    for ev in events:
        if ev.is_current:
            return ev
    for ev in events:
        if ev.is_next:
            return ev
    return events[0]


def check_references(feed: RawFeed) -> None:
    team_codes = {t.code for t in feed.teams}
    position_ids = {p.id for p in feed.element_types}

    bad_teams = sorted({el.team_code for el in feed.elements} - team_codes)
    bad_positions = sorted({el.element_type for el in feed.elements} - position_ids)
    if bad_teams or bad_positions:
        raise UpstreamMalformed(
            f"elements reference unknown team codes {bad_teams} / element types {bad_positions}"
        )


class _Deadline:
    def __init__(self, seconds: float):
        self.seconds = seconds
        self._t0 = time.monotonic()

    def check(self, step: str) -> None:
        if time.monotonic() - self._t0 > self.seconds:
            raise StoreWriteFailed(f"refresh transaction exceeded {self.seconds:.0f}s (at step {step})")


def _lock_postgres(db: Session, timeout_s: float) -> None:
    # Both are scoped to the transaction and released on commit/rollback
    got = db.execute(text("SELECT pg_try_advisory_xact_lock(:k)"), {"k": ADVISORY_LOCK_KEY}).scalar()
    if not got:
        raise AlreadyInProgress("another worker holds the refresh advisory lock")
    db.execute(text(f"SET LOCAL statement_timeout = {int(timeout_s * 1000)}"))


def _write_snapshot(db: Session, feed: RawFeed, gameweek_id: int, now: datetime) -> int:
    deadline = _Deadline(settings.REFRESH_TX_TIMEOUT_S)

    if db.get_bind().dialect.name == "postgresql":
        _lock_postgres(db, settings.REFRESH_TX_TIMEOUT_S)

    gw = upsert_gameweeks(db, feed.events)
    deadline.check("gameweeks")
    teams = upsert_teams(db, feed.teams)
    deadline.check("teams")
    positions = upsert_positions(db, feed.element_types)
    deadline.check("positions")
    players = upsert_players(db, feed.elements, now)
    deadline.check("players")
    gw_players = upsert_gameweek_players(db, gameweek_id, feed.elements, now)
    deadline.check("gameweek_players")

    logger.info(
        "Snapshot written: gameweeks=%s teams=%s positions=%s players=%s gameweek_players=%s",
        gw, teams, positions, players, gw_players,
    )
    return players["total"]


def _record_failure(db: Session, trigger: str, started_at: datetime, exc: Exception) -> None:
    try:
        db.add(
            RefreshRun(
                trigger=trigger,
                status=STATUS_FAILED,
                started_at=started_at,
                finished_at=datetime.now(timezone.utc),
                error=f"{exc.__class__.__name__}: {exc}"[:2000],
            )
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not record failed refresh run")


def refresh_snapshot(
    db: Session,
    *,
    trigger: str = TRIGGER_MANUAL,
    feed: Optional[RawFeed] = None,
    fetch: Optional[Callable[[], RawFeed]] = None,
) -> RefreshResult:
    """Run one refresh cycle.

    Raises AlreadyInProgress when another refresh is running, any Upstream*
    error when the feed cannot be used, StoreWriteFailed when the write
    transaction fails. The snapshot tables are untouched in every failure case.
    """
    with refresh_guard(reason=trigger):
        started_at = datetime.now(timezone.utc)
        logger.info("Snapshot refresh started (trigger=%s)", trigger)
        try:
            if feed is None:
                feed = (fetch or fetch_snapshot)()
            active = select_active_gameweek(feed.events)
            check_references(feed)
            logger.info("Active gameweek %s (%s)", active.id, active.name)

            try:
                count = _write_snapshot(db, feed, active.id, started_at)
                finished_at = datetime.now(timezone.utc)
                db.add(
                    RefreshRun(
                        trigger=trigger,
                        status=STATUS_SUCCESS,
                        started_at=started_at,
                        finished_at=finished_at,
                        gameweek_id=active.id,
                        players_updated=count,
                    )
                )
                db.commit()
            except SnapshotError:
                db.rollback()
                raise
            except SQLAlchemyError as exc:
                db.rollback()
                raise StoreWriteFailed(f"snapshot transaction rolled back: {exc.__class__.__name__}: {exc}") from exc
        except SnapshotError as exc:
            logger.error("Snapshot refresh failed (trigger=%s): %s", trigger, exc)
            _record_failure(db, trigger, started_at, exc)
            raise

    logger.info("Snapshot refresh completed: %d players, gameweek %s", count, active.id)
    return RefreshResult(
        players_updated=count,
        gameweek_id=active.id,
        started_at=started_at,
        finished_at=finished_at,
    )
