from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fpl_dashboard.db.session import get_db
from fpl_dashboard.schemas.gameweeks import GameweekOut
from fpl_dashboard.services.queries import get_gameweeks

router = APIRouter(prefix="/api", tags=["gameweeks"])


@router.get("/gameweeks", response_model=list[GameweekOut])
def list_gameweeks(db: Session = Depends(get_db)):
    return get_gameweeks(db)
