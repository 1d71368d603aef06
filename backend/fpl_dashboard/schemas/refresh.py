from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class RefreshResultOut(BaseModel):
    message: str
    players_updated: int
    gameweek_id: int
    started_at: datetime
    finished_at: datetime


class GameweekCountsOut(BaseModel):
    total: int
    latest: int | None = None
    current: int
    next: int


class DataStatusOut(BaseModel):
    status: str
    last_update: datetime | None = None
    total_players: int
    gameweeks: GameweekCountsOut
    next_refresh: datetime | None = None
    refresh_in_progress: bool
