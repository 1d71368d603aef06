from sqlalchemy import Column, DateTime, Integer, String, Text

from fpl_dashboard.db.base import Base

STATUS_SUCCESS = "success"
STATUS_FAILED = "failed"


class RefreshRun(Base):
    __tablename__ = "refresh_runs"

    id = Column(Integer, primary_key=True, index=True)

    trigger = Column(String(16), nullable=False)  # "scheduled" / "manual" / "feed"
    status = Column(String(16), nullable=False, index=True)

    started_at = Column(DateTime(timezone=True), nullable=False)
    finished_at = Column(DateTime(timezone=True), nullable=True, index=True)

    gameweek_id = Column(Integer, nullable=True)
    players_updated = Column(Integer, nullable=True)
    error = Column(Text, nullable=True)
