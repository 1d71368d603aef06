"""Read-only projections of the snapshot tables."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from fpl_dashboard.core.errors import NotFound
from fpl_dashboard.models.gameweek_players import GameweekPlayer
from fpl_dashboard.models.gameweeks import Gameweek
from fpl_dashboard.models.player_stats import STAT_FIELDS
from fpl_dashboard.models.players import Player
from fpl_dashboard.models.refresh_runs import STATUS_SUCCESS, RefreshRun
from fpl_dashboard.services.refresh_lock import refresh_in_progress

SORTABLE_FIELDS = frozenset(STAT_FIELDS) | {"fpl_id", "first_name", "second_name", "team_code", "position_id"}


def _player_row(p) -> Dict[str, Any]:
    row: Dict[str, Any] = {
        "fpl_id": p.fpl_id,
        "first_name": p.first_name,
        "second_name": p.second_name,
        "name": f"{p.first_name} {p.second_name}",
        "team_code": p.team_code,
        "team_name": p.team.name if p.team else None,
        "team_short_name": p.team.short_name if p.team else None,
        "position_id": p.position_id,
        "position_name": p.position.singular_name if p.position else None,
        "last_updated": p.last_updated,
    }
    for field in STAT_FIELDS:
        row[field] = getattr(p, field)
    return row


def _gameweek_player_row(gp: GameweekPlayer) -> Dict[str, Any]:
    row = _player_row(gp)
    row["gameweek_id"] = gp.gameweek_id
    row["gameweek_name"] = gp.gameweek.name if gp.gameweek else None
    return row


def get_summary(db: Session, sort_by: Optional[str] = None, descending: bool = True) -> List[Dict[str, Any]]:
    """Latest snapshot joined with team and position, best players first."""
    key = sort_by or "total_points"
    if key not in SORTABLE_FIELDS:
        raise ValueError(f"cannot sort by {key!r}")

    col = getattr(Player, key)
    order = col.desc().nulls_last() if descending else col.asc().nulls_last()
    rows = db.query(Player).order_by(order, Player.fpl_id.asc()).all()
    return [_player_row(p) for p in rows]


def get_gameweek_data(db: Session, gameweek_id: Optional[int] = None) -> List[Dict[str, Any]]:
    q = db.query(GameweekPlayer)
    if gameweek_id is not None:
        q = q.filter(GameweekPlayer.gameweek_id == gameweek_id)

    rows = q.order_by(
        GameweekPlayer.gameweek_id.asc(),
        GameweekPlayer.total_points.desc().nulls_last(),
        GameweekPlayer.fpl_id.asc(),
    ).all()
    return [_gameweek_player_row(r) for r in rows]


def get_player_history(db: Session, fpl_id: int) -> Dict[str, Any]:
    p = db.query(Player).filter(Player.fpl_id == fpl_id).one_or_none()
    if p is None:
        raise NotFound(f"player {fpl_id} not found")

    history = [
        _gameweek_player_row(r)
        for r in (
            db.query(GameweekPlayer)
            .filter(GameweekPlayer.fpl_id == fpl_id)
            .order_by(GameweekPlayer.gameweek_id.asc())
            .all()
        )
    ]
    if not history:
        # Only the current snapshot is known so far
        history = [_player_row(p)]

    return {
        "player_info": {
            "fpl_id": p.fpl_id,
            "name": f"{p.first_name} {p.second_name}",
            "current_team": p.team.name if p.team else None,
            "position": p.position.singular_name if p.position else None,
        },
        "history": history,
        "total_records": len(history),
    }


def get_gameweeks(db: Session) -> List[Gameweek]:
    return db.query(Gameweek).order_by(Gameweek.gameweek_id.asc()).all()


def get_status(db: Session, next_refresh=None) -> Dict[str, Any]:
    last_update = (
        db.query(func.max(RefreshRun.finished_at))
        .filter(RefreshRun.status == STATUS_SUCCESS)
        .scalar()
    )
    total_players = db.query(func.count(Player.id)).scalar() or 0

    total, latest, current, nxt = db.query(
        func.count(Gameweek.id),
        func.max(Gameweek.gameweek_id),
        func.coalesce(func.sum(case((Gameweek.is_current == True, 1), else_=0)), 0),  # noqa: E712
        func.coalesce(func.sum(case((Gameweek.is_next == True, 1), else_=0)), 0),  # noqa: E712
    ).one()

    return {
        "status": "Data available" if total_players else "No data",
        "last_update": last_update,
        "total_players": int(total_players),
        "gameweeks": {
            "total": int(total or 0),
            "latest": latest,
            "current": int(current or 0),
            "next": int(nxt or 0),
        },
        "next_refresh": next_refresh,
        "refresh_in_progress": refresh_in_progress(),
    }
