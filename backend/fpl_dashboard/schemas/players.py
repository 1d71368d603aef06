from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class PlayerStatsOut(BaseModel):
    now_cost: int | None = None
    total_points: int | None = None
    minutes: int | None = None
    goals_scored: int | None = None
    assists: int | None = None
    clean_sheets: int | None = None
    goals_conceded: int | None = None
    own_goals: int | None = None
    penalties_saved: int | None = None
    penalties_missed: int | None = None
    yellow_cards: int | None = None
    red_cards: int | None = None
    saves: int | None = None
    bonus: int | None = None
    starts: int | None = None

    form: float | None = None
    points_per_game: float | None = None
    value_form: float | None = None
    value_season: float | None = None
    selected_by_percent: float | None = None
    influence: float | None = None
    creativity: float | None = None
    threat: float | None = None
    ict_index: float | None = None
    defensive_contribution: float | None = None
    expected_goals: float | None = None
    expected_assists: float | None = None
    expected_goal_involvements: float | None = None
    expected_goals_conceded: float | None = None
    expected_goals_per_90: float | None = None
    saves_per_90: float | None = None
    expected_assists_per_90: float | None = None
    expected_goals_conceded_per_90: float | None = None
    goals_conceded_per_90: float | None = None
    clean_sheets_per_90: float | None = None


class PlayerSummaryOut(PlayerStatsOut):
    fpl_id: int
    first_name: str
    second_name: str
    name: str

    team_code: int
    team_name: str | None = None
    team_short_name: str | None = None
    position_id: int
    position_name: str | None = None

    last_updated: datetime | None = None


class GameweekPlayerOut(PlayerSummaryOut):
    gameweek_id: int
    gameweek_name: str | None = None


class HistoryEntryOut(PlayerSummaryOut):
    # None when the entry is the current snapshot rather than a gameweek row
    gameweek_id: int | None = None
    gameweek_name: str | None = None


class PlayerInfoOut(BaseModel):
    fpl_id: int
    name: str
    current_team: str | None = None
    position: str | None = None


class PlayerHistoryOut(BaseModel):
    player_info: PlayerInfoOut
    history: list[HistoryEntryOut]
    total_records: int
