from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from fpl_dashboard.api.errors import to_http
from fpl_dashboard.core.errors import NotFound
from fpl_dashboard.db.session import get_db
from fpl_dashboard.schemas.players import GameweekPlayerOut, PlayerHistoryOut, PlayerSummaryOut
from fpl_dashboard.services.queries import get_gameweek_data, get_player_history, get_summary

router = APIRouter(prefix="/api", tags=["players"])


@router.get("/stored-fpl-data", response_model=list[PlayerSummaryOut])
def stored_fpl_data(
    sort_by: Optional[str] = Query(default=None),
    order: Literal["asc", "desc"] = Query(default="desc"),
    db: Session = Depends(get_db),
):
    try:
        return get_summary(db, sort_by=sort_by, descending=(order == "desc"))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.get("/gameweek-fpl-data", response_model=list[GameweekPlayerOut])
def gameweek_fpl_data(
    gameweek: Optional[int] = Query(default=None, ge=1),
    db: Session = Depends(get_db),
):
    return get_gameweek_data(db, gameweek_id=gameweek)


@router.get("/player-history/{fpl_id}", response_model=PlayerHistoryOut)
def player_history(fpl_id: int, db: Session = Depends(get_db)):
    try:
        return get_player_history(db, fpl_id)
    except NotFound as exc:
        raise to_http(exc)
