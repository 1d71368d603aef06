"""Tests for the snapshot refresh pipeline.

Verifies:
1. Worked example: one element ends up in both the summary and the gameweek view
2. Referential integrity of players against teams/positions
3. Idempotence: two refreshes with the same feed, no duplicated gameweek rows
4. Rollback: failed fetch or failed write leaves the snapshot untouched
5. Single-flight: a second concurrent refresh gets AlreadyInProgress
"""

import threading

import pytest
from sqlalchemy.exc import OperationalError

from fpl_dashboard.clients.fpl import parse_feed
from fpl_dashboard.core.errors import (
    AlreadyInProgress,
    StoreWriteFailed,
    UpstreamMalformed,
    UpstreamUnavailable,
)
from fpl_dashboard.models import GameweekPlayer, Gameweek, Player, Position, RefreshRun, Team
from fpl_dashboard.models.player_stats import STAT_FIELDS
from fpl_dashboard.schemas.feed import FeedEvent
from fpl_dashboard.services import refresh as refresh_module
from fpl_dashboard.services.queries import get_gameweek_data, get_summary
from fpl_dashboard.services.refresh import refresh_snapshot, select_active_gameweek
from fpl_dashboard.services.refresh_lock import refresh_guard, refresh_in_progress


def run(db, payload, **kwargs):
    feed = parse_feed(payload)
    return refresh_snapshot(db, fetch=lambda: feed, **kwargs)


def snapshot_state(db):
    """Everything a reader could observe in the five snapshot tables."""
    players = {
        p.fpl_id: (p.first_name, p.second_name, p.team_code, p.position_id, p.last_updated)
        + tuple(getattr(p, f) for f in STAT_FIELDS)
        for p in db.query(Player).all()
    }
    return {
        "players": players,
        "teams": sorted((t.team_code, t.name, t.short_name) for t in db.query(Team).all()),
        "positions": sorted((p.position_id, p.singular_name) for p in db.query(Position).all()),
        "gameweeks": sorted((g.gameweek_id, g.is_current, g.is_next) for g in db.query(Gameweek).all()),
        "gameweek_players": sorted(
            (r.fpl_id, r.gameweek_id, r.total_points) for r in db.query(GameweekPlayer).all()
        ),
    }


class TestSelectActiveGameweek:

    def _events(self, *flags):
        return [
            FeedEvent(id=i + 1, name=f"Gameweek {i + 1}", **f)
            for i, f in enumerate(flags)
        ]

    def test_current_wins(self):
        events = self._events({"is_next": True}, {"is_current": True}, {})
        assert select_active_gameweek(events).id == 2

    def test_next_when_no_current(self):
        events = self._events({"is_previous": True}, {}, {"is_next": True})
        assert select_active_gameweek(events).id == 3

    def test_first_when_no_flags(self):
        events = self._events({}, {}, {})
        assert select_active_gameweek(events).id == 1

    def test_no_events_is_malformed(self):
        with pytest.raises(UpstreamMalformed):
            select_active_gameweek([])


class TestRefreshSnapshot:

    def test_worked_example(self, db, element):
        payload = {
            "elements": [element(1, "A", "B", 3, 2, total_points=50, now_cost=55)],
            "teams": [{"code": 3, "name": "Arsenal", "short_name": "ARS"}],
            "element_types": [{"id": 2, "singular_name": "Defender", "plural_name": "Defenders"}],
            "events": [{"id": 5, "name": "Gameweek 5", "is_current": True}],
        }
        result = run(db, payload)

        assert result.players_updated == 1
        assert result.gameweek_id == 5

        summary = get_summary(db)
        assert len(summary) == 1
        row = summary[0]
        assert row["fpl_id"] == 1
        assert row["name"] == "A B"
        assert row["team_name"] == "Arsenal"
        assert row["position_name"] == "Defender"
        assert row["total_points"] == 50

        gw_rows = get_gameweek_data(db, 5)
        assert len(gw_rows) == 1
        assert gw_rows[0]["fpl_id"] == 1
        assert gw_rows[0]["gameweek_id"] == 5
        assert gw_rows[0]["gameweek_name"] == "Gameweek 5"

    def test_referential_integrity(self, db, payload):
        run(db, payload)

        team_codes = {t.team_code for t in db.query(Team).all()}
        position_ids = {p.position_id for p in db.query(Position).all()}
        for p in db.query(Player).all():
            assert p.team_code in team_codes
            assert p.position_id in position_ids
        for r in db.query(GameweekPlayer).all():
            assert r.team_code in team_codes
            assert r.position_id in position_ids

    def test_unknown_team_code_is_malformed(self, db, payload, element):
        run(db, payload)
        before = snapshot_state(db)

        payload["elements"].append(element(99, "Ghost", "Player", 999, 2))
        with pytest.raises(UpstreamMalformed, match="999"):
            run(db, payload)
        assert snapshot_state(db) == before

    def test_idempotent_and_no_duplicate_gameweek_rows(self, db, payload):
        run(db, payload)
        players_before = {
            p.fpl_id: (p.id,) + tuple(getattr(p, f) for f in STAT_FIELDS)
            for p in db.query(Player).all()
        }

        run(db, payload)
        players_after = {
            p.fpl_id: (p.id,) + tuple(getattr(p, f) for f in STAT_FIELDS)
            for p in db.query(Player).all()
        }

        # same rows, same primary keys
        assert players_after == players_before
        rows = db.query(GameweekPlayer).filter(GameweekPlayer.gameweek_id == 5).all()
        assert sorted(r.fpl_id for r in rows) == [1, 2, 3]

    def test_second_refresh_same_week_overwrites_stats(self, db, payload):
        run(db, payload)
        payload["elements"][0]["total_points"] = 56
        run(db, payload)

        rows = db.query(GameweekPlayer).filter(GameweekPlayer.fpl_id == 1).all()
        assert len(rows) == 1
        assert rows[0].total_points == 56
        assert db.query(Player).filter(Player.fpl_id == 1).one().total_points == 56

    def test_new_gameweek_keeps_previous_rows(self, db, payload):
        run(db, payload)

        for ev in payload["events"]:
            ev["is_current"] = ev["id"] == 6
            ev["is_next"] = False
        run(db, payload)

        assert sorted({r.gameweek_id for r in db.query(GameweekPlayer).all()}) == [5, 6]
        assert db.query(GameweekPlayer).count() == 6
        current = db.query(Gameweek).filter(Gameweek.is_current == True).all()  # noqa: E712
        assert [g.gameweek_id for g in current] == [6]

    def test_player_missing_from_feed_is_dropped(self, db, payload):
        run(db, payload)
        payload["elements"] = [el for el in payload["elements"] if el["id"] != 3]
        run(db, payload)

        assert sorted(p.fpl_id for p in db.query(Player).all()) == [1, 2]
        # his gameweek history stays
        assert db.query(GameweekPlayer).filter(GameweekPlayer.fpl_id == 3).count() == 1

    def test_records_successful_run(self, db, payload):
        run(db, payload, trigger="scheduled")

        runs = db.query(RefreshRun).all()
        assert len(runs) == 1
        assert runs[0].status == "success"
        assert runs[0].trigger == "scheduled"
        assert runs[0].players_updated == 3
        assert runs[0].gameweek_id == 5


class TestRollback:

    def test_fetch_failure_leaves_store_untouched(self, db, payload):
        run(db, payload)
        before = snapshot_state(db)
        summary_before = get_summary(db)

        def broken_fetch():
            raise UpstreamUnavailable("503 from upstream")

        with pytest.raises(UpstreamUnavailable):
            refresh_snapshot(db, fetch=broken_fetch)

        assert snapshot_state(db) == before
        assert get_summary(db) == summary_before

        failed = db.query(RefreshRun).filter(RefreshRun.status == "failed").one()
        assert "UpstreamUnavailable" in failed.error

    def test_write_failure_rolls_back_whole_transaction(self, db, payload, monkeypatch):
        run(db, payload)
        before = snapshot_state(db)

        payload["elements"][1]["total_points"] = 999
        payload["teams"][0]["name"] = "Renamed FC"

        def boom(*args, **kwargs):
            raise OperationalError("INSERT INTO gameweek_players", {}, Exception("disk I/O error"))

        monkeypatch.setattr(refresh_module, "upsert_gameweek_players", boom)

        with pytest.raises(StoreWriteFailed):
            run(db, payload)

        # players and teams were already written in the failed transaction
        assert snapshot_state(db) == before

    def test_can_run_again_after_failure(self, db, payload):
        def down():
            raise UpstreamUnavailable("down")

        with pytest.raises(UpstreamUnavailable):
            refresh_snapshot(db, fetch=down)

        assert not refresh_in_progress()
        result = run(db, payload)
        assert result.players_updated == 3

    def test_transaction_deadline(self, db, payload, monkeypatch):
        monkeypatch.setattr(refresh_module.settings, "REFRESH_TX_TIMEOUT_S", -1.0)
        with pytest.raises(StoreWriteFailed, match="exceeded"):
            run(db, payload)
        assert db.query(Player).count() == 0
        assert db.query(Team).count() == 0


class TestSingleFlight:

    def test_rejects_while_guard_held(self, db, payload):
        with refresh_guard(reason="test"):
            assert refresh_in_progress()
            with pytest.raises(AlreadyInProgress):
                run(db, payload)
        assert not refresh_in_progress()
        assert db.query(Player).count() == 0

    def test_concurrent_calls_only_one_runs(self, session_factory, payload):
        feed = parse_feed(payload)
        entered = threading.Event()
        release = threading.Event()
        outcome = {}

        def slow_fetch():
            entered.set()
            assert release.wait(timeout=5)
            return feed

        def first():
            s = session_factory()
            try:
                outcome["first"] = refresh_snapshot(s, fetch=slow_fetch)
            finally:
                s.close()

        t = threading.Thread(target=first)
        t.start()
        assert entered.wait(timeout=5)

        second = session_factory()
        try:
            with pytest.raises(AlreadyInProgress):
                refresh_snapshot(second, fetch=lambda: feed)
        finally:
            release.set()
            t.join(timeout=10)
            second.close()

        assert outcome["first"].players_updated == 3
        check = session_factory()
        try:
            assert check.query(RefreshRun).count() == 1
        finally:
            check.close()
