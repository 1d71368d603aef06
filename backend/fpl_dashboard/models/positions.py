from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String

from fpl_dashboard.db.base import Base


class Position(Base):
    __tablename__ = "positions"

    id = Column(Integer, primary_key=True, index=True)

    position_id = Column(Integer, unique=True, nullable=False)  # feed element_type id
    singular_name = Column(String(50), nullable=False)
    plural_name = Column(String(50), nullable=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
