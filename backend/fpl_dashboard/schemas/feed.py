from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class FeedModel(BaseModel):
    # The feed carries dozens of fields we do not store
    model_config = ConfigDict(extra="ignore")


class FeedEvent(FeedModel):
    id: int
    name: str
    deadline_time: Optional[datetime] = None
    is_current: bool = False
    is_next: bool = False
    is_previous: bool = False
    finished: bool = False

    @field_validator("is_current", "is_next", "is_previous", "finished", mode="before")
    @classmethod
    def _null_flag_is_false(cls, v):
        return False if v is None else v


class FeedTeam(FeedModel):
    code: int
    name: str
    short_name: Optional[str] = None


class FeedElementType(FeedModel):
    id: int
    singular_name: str
    plural_name: Optional[str] = None


class FeedElement(FeedModel):
    id: int
    first_name: str
    second_name: str
    team_code: int
    element_type: int

    now_cost: Optional[int] = None
    total_points: Optional[int] = None
    minutes: Optional[int] = None
    goals_scored: Optional[int] = None
    assists: Optional[int] = None
    clean_sheets: Optional[int] = None
    goals_conceded: Optional[int] = None
    own_goals: Optional[int] = None
    penalties_saved: Optional[int] = None
    penalties_missed: Optional[int] = None
    yellow_cards: Optional[int] = None
    red_cards: Optional[int] = None
    saves: Optional[int] = None
    bonus: Optional[int] = None
    starts: Optional[int] = None

    # strings like "5.3" in the feed, coerced by pydantic
    form: Optional[float] = None
    points_per_game: Optional[float] = None
    value_form: Optional[float] = None
    value_season: Optional[float] = None
    selected_by_percent: Optional[float] = None
    influence: Optional[float] = None
    creativity: Optional[float] = None
    threat: Optional[float] = None
    ict_index: Optional[float] = None
    defensive_contribution: Optional[float] = None
    expected_goals: Optional[float] = None
    expected_assists: Optional[float] = None
    expected_goal_involvements: Optional[float] = None
    expected_goals_conceded: Optional[float] = None
    expected_goals_per_90: Optional[float] = None
    saves_per_90: Optional[float] = None
    expected_assists_per_90: Optional[float] = None
    expected_goals_conceded_per_90: Optional[float] = None
    goals_conceded_per_90: Optional[float] = None
    clean_sheets_per_90: Optional[float] = None


class RawFeed(FeedModel):
    events: list[FeedEvent]
    teams: list[FeedTeam]
    element_types: list[FeedElementType]
    elements: list[FeedElement]
