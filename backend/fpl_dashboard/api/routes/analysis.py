from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from fpl_dashboard.db.session import get_db
from fpl_dashboard.schemas.analysis import AnalysisOut
from fpl_dashboard.services.analysis import ALL, build_analysis
from fpl_dashboard.services.queries import get_summary

router = APIRouter(prefix="/api", tags=["analysis"])


@router.get("/analysis", response_model=AnalysisOut)
def analysis(
    category: str = Query(default=ALL),
    position_id: Optional[int] = Query(default=None, ge=1),
    db: Session = Depends(get_db),
):
    try:
        return build_analysis(get_summary(db), category=category, position_id=position_id)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
