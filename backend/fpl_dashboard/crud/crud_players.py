from datetime import datetime

from sqlalchemy.orm import Session

from fpl_dashboard.models.gameweek_players import GameweekPlayer
from fpl_dashboard.models.player_stats import STAT_FIELDS
from fpl_dashboard.models.players import Player
from fpl_dashboard.schemas.feed import FeedElement


def _apply_element(row, el: FeedElement, now: datetime) -> None:
    row.first_name = el.first_name
    row.second_name = el.second_name
    row.team_code = el.team_code
    row.position_id = el.element_type
    for field in STAT_FIELDS:
        setattr(row, field, getattr(el, field))
    row.last_updated = now


def upsert_players(db: Session, elements: list[FeedElement], now: datetime) -> dict:
    """Upsert one row per fpl_id and drop players the feed no longer lists."""
    created = 0
    updated = 0

    # Deduplicate within the batch, last one wins
    uniq: dict[int, FeedElement] = {el.id: el for el in elements}

    existing = {p.fpl_id: p for p in db.query(Player).all()}

    for fpl_id, el in uniq.items():
        row = existing.get(fpl_id)
        if row is None:
            row = Player(fpl_id=fpl_id, created_at=now)
            db.add(row)
            created += 1
        else:
            updated += 1
        _apply_element(row, el, now)

    stale = db.query(Player)
    if uniq:
        stale = stale.filter(~Player.fpl_id.in_(list(uniq)))
    deleted = stale.delete(synchronize_session=False)

    db.flush()
    return {"created": created, "updated": updated, "deleted": deleted, "total": len(uniq)}


def upsert_gameweek_players(db: Session, gameweek_id: int, elements: list[FeedElement], now: datetime) -> dict:
    """Upsert on (fpl_id, gameweek_id): a second refresh in the same week overwrites the stats."""
    created = 0
    updated = 0

    uniq: dict[int, FeedElement] = {el.id: el for el in elements}

    existing = {
        r.fpl_id: r
        for r in db.query(GameweekPlayer).filter(GameweekPlayer.gameweek_id == gameweek_id).all()
    }

    for fpl_id, el in uniq.items():
        row = existing.get(fpl_id)
        if row is None:
            row = GameweekPlayer(fpl_id=fpl_id, gameweek_id=gameweek_id)
            db.add(row)
            created += 1
        else:
            updated += 1
        _apply_element(row, el, now)

    db.flush()
    return {"created": created, "updated": updated, "total": len(uniq)}
