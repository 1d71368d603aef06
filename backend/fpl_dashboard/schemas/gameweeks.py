from datetime import datetime

from pydantic import BaseModel


class GameweekOut(BaseModel):
    gameweek_id: int
    name: str
    deadline_time: datetime | None = None
    is_current: bool
    is_next: bool
    is_previous: bool
    finished: bool

    class Config:
        from_attributes = True
