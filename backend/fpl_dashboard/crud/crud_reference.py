# Upserts for the reference tables. No commit here: the refresh pipeline owns the transaction.
from sqlalchemy.orm import Session

from fpl_dashboard.models.gameweeks import Gameweek
from fpl_dashboard.models.positions import Position
from fpl_dashboard.models.teams import Team
from fpl_dashboard.schemas.feed import FeedElementType, FeedEvent, FeedTeam


def upsert_gameweeks(db: Session, events: list[FeedEvent]) -> dict:
    created = 0
    updated = 0

    existing = {g.gameweek_id: g for g in db.query(Gameweek).all()}

    for ev in events:
        row = existing.get(ev.id)
        if row is None:
            row = Gameweek(gameweek_id=ev.id)
            db.add(row)
            existing[ev.id] = row
            created += 1
        else:
            updated += 1

        row.name = ev.name
        row.deadline_time = ev.deadline_time
        row.is_current = ev.is_current
        row.is_next = ev.is_next
        row.is_previous = ev.is_previous
        row.finished = ev.finished

    db.flush()
    return {"created": created, "updated": updated, "total": len(events)}


def upsert_teams(db: Session, teams: list[FeedTeam]) -> dict:
    created = 0
    updated = 0

    existing = {t.team_code: t for t in db.query(Team).all()}

    for ft in teams:
        row = existing.get(ft.code)
        if row is None:
            row = Team(team_code=ft.code)
            db.add(row)
            existing[ft.code] = row
            created += 1
        else:
            updated += 1

        row.name = ft.name
        row.short_name = ft.short_name

    db.flush()
    return {"created": created, "updated": updated, "total": len(teams)}


def upsert_positions(db: Session, element_types: list[FeedElementType]) -> dict:
    created = 0
    updated = 0

    existing = {p.position_id: p for p in db.query(Position).all()}

    for et in element_types:
        row = existing.get(et.id)
        if row is None:
            row = Position(position_id=et.id)
            db.add(row)
            existing[et.id] = row
            created += 1
        else:
            updated += 1

        row.singular_name = et.singular_name
        row.plural_name = et.plural_name

    db.flush()
    return {"created": created, "updated": updated, "total": len(element_types)}
