from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from fpl_dashboard.db.base import Base
from fpl_dashboard.models.player_stats import PlayerStatsMixin


def _utcnow():
    return datetime.now(timezone.utc)


class Player(PlayerStatsMixin, Base):
    """Latest known cumulative stats, one row per FPL player."""

    __tablename__ = "players"

    id = Column(Integer, primary_key=True, index=True)

    fpl_id = Column(Integer, unique=True, nullable=False)
    first_name = Column(String(100), nullable=False)
    second_name = Column(String(100), nullable=False)

    team_code = Column(Integer, ForeignKey("teams.team_code"), nullable=False, index=True)
    position_id = Column(Integer, ForeignKey("positions.position_id"), nullable=False, index=True)

    last_updated = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    team = relationship("Team", lazy="joined")
    position = relationship("Position", lazy="joined")
