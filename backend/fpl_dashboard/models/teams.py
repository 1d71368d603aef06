from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String

from fpl_dashboard.db.base import Base


class Team(Base):
    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, index=True)

    team_code = Column(Integer, unique=True, nullable=False)  # feed "code", stable across seasons
    name = Column(String(100), nullable=False)                # ej: "Arsenal"
    short_name = Column(String(50), nullable=True)            # ej: "ARS"

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
