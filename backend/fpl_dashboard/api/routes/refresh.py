import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from fpl_dashboard.api.errors import to_http
from fpl_dashboard.clients.fpl import fetch_raw, parse_feed
from fpl_dashboard.core.errors import SnapshotError
from fpl_dashboard.core.security import require_admin
from fpl_dashboard.db.session import get_db
from fpl_dashboard.schemas.refresh import DataStatusOut, RefreshResultOut
from fpl_dashboard.services.queries import get_status
from fpl_dashboard.services.refresh import TRIGGER_FEED, TRIGGER_MANUAL, refresh_snapshot
from fpl_dashboard.services.scheduler import next_refresh_time

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["refresh"])


def _result_out(message: str, result) -> RefreshResultOut:
    return RefreshResultOut(
        message=message,
        players_updated=result.players_updated,
        gameweek_id=result.gameweek_id,
        started_at=result.started_at,
        finished_at=result.finished_at,
    )


@router.post("/refresh-fpl-data", response_model=RefreshResultOut)
def refresh_fpl_data(_admin=Depends(require_admin), db: Session = Depends(get_db)):
    logger.info("Manual snapshot refresh triggered")
    try:
        result = refresh_snapshot(db, trigger=TRIGGER_MANUAL)
    except SnapshotError as exc:
        raise to_http(exc)
    return _result_out("FPL data refresh completed successfully", result)


@router.post("/store-fpl-data", response_model=RefreshResultOut)
def store_fpl_data(
    payload: Dict[str, Any] = Body(...),
    _admin=Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Run the pipeline on a feed document supplied by the caller instead of fetching it."""
    try:
        feed = parse_feed(payload)
        result = refresh_snapshot(db, trigger=TRIGGER_FEED, feed=feed)
    except SnapshotError as exc:
        raise to_http(exc)
    return _result_out("FPL data stored successfully", result)


@router.get("/fpl-data")
def fpl_data_proxy():
    try:
        return fetch_raw()
    except SnapshotError as exc:
        raise to_http(exc)


@router.get("/data-status", response_model=DataStatusOut)
def data_status(db: Session = Depends(get_db)):
    return get_status(db, next_refresh=next_refresh_time())
