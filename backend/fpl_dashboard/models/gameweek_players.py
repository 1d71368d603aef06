from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from fpl_dashboard.db.base import Base
from fpl_dashboard.models.player_stats import PlayerStatsMixin


class GameweekPlayer(PlayerStatsMixin, Base):
    """Player stats as recorded by the latest refresh that ran during a gameweek."""

    __tablename__ = "gameweek_players"

    id = Column(Integer, primary_key=True, index=True)

    # No FK to players: history survives a player leaving the game
    fpl_id = Column(Integer, nullable=False, index=True)
    gameweek_id = Column(Integer, ForeignKey("gameweeks.gameweek_id"), nullable=False, index=True)

    first_name = Column(String(100), nullable=False)
    second_name = Column(String(100), nullable=False)

    team_code = Column(Integer, ForeignKey("teams.team_code"), nullable=False)
    position_id = Column(Integer, ForeignKey("positions.position_id"), nullable=False)

    last_updated = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    team = relationship("Team", lazy="joined")
    position = relationship("Position", lazy="joined")
    gameweek = relationship("Gameweek", lazy="joined")

    __table_args__ = (
        UniqueConstraint("fpl_id", "gameweek_id", name="uq_gameweek_players_player_gw"),
    )
