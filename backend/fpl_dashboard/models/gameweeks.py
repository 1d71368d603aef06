from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from fpl_dashboard.db.base import Base


class Gameweek(Base):
    __tablename__ = "gameweeks"

    id = Column(Integer, primary_key=True, index=True)

    gameweek_id = Column(Integer, unique=True, nullable=False)  # feed event id (1..38)
    name = Column(String(50), nullable=False)
    deadline_time = Column(DateTime(timezone=True), nullable=True)

    # At most one is_current: the feed guarantees it, we do not check
    is_current = Column(Boolean, default=False, nullable=False)
    is_next = Column(Boolean, default=False, nullable=False)
    is_previous = Column(Boolean, default=False, nullable=False)
    finished = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
