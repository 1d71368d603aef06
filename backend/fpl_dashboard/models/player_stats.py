from sqlalchemy import Column, Integer, Numeric

# Integer counters as sent by the feed
INT_STAT_FIELDS = (
    "now_cost",
    "total_points",
    "minutes",
    "goals_scored",
    "assists",
    "clean_sheets",
    "goals_conceded",
    "own_goals",
    "penalties_saved",
    "penalties_missed",
    "yellow_cards",
    "red_cards",
    "saves",
    "bonus",
    "starts",
)

# The feed sends most of these as strings ("5.3"); stored with 2 decimals
DECIMAL_STAT_FIELDS = (
    "form",
    "points_per_game",
    "value_form",
    "value_season",
    "selected_by_percent",
    "influence",
    "creativity",
    "threat",
    "ict_index",
    "defensive_contribution",
    "expected_goals",
    "expected_assists",
    "expected_goal_involvements",
    "expected_goals_conceded",
    "expected_goals_per_90",
    "saves_per_90",
    "expected_assists_per_90",
    "expected_goals_conceded_per_90",
    "goals_conceded_per_90",
    "clean_sheets_per_90",
)

STAT_FIELDS = INT_STAT_FIELDS + DECIMAL_STAT_FIELDS


def _decimal():
    return Column(Numeric(10, 2, asdecimal=False), nullable=True)


class PlayerStatsMixin:
    """Cumulative season statistics shared by both player tables."""

    now_cost = Column(Integer, nullable=True)  # tenths of a million
    total_points = Column(Integer, nullable=True, index=True)
    minutes = Column(Integer, nullable=True)
    goals_scored = Column(Integer, nullable=True)
    assists = Column(Integer, nullable=True)
    clean_sheets = Column(Integer, nullable=True)
    goals_conceded = Column(Integer, nullable=True)
    own_goals = Column(Integer, nullable=True)
    penalties_saved = Column(Integer, nullable=True)
    penalties_missed = Column(Integer, nullable=True)
    yellow_cards = Column(Integer, nullable=True)
    red_cards = Column(Integer, nullable=True)
    saves = Column(Integer, nullable=True)
    bonus = Column(Integer, nullable=True)
    starts = Column(Integer, nullable=True)

    form = _decimal()
    points_per_game = _decimal()
    value_form = _decimal()
    value_season = _decimal()
    selected_by_percent = _decimal()
    influence = _decimal()
    creativity = _decimal()
    threat = _decimal()
    ict_index = _decimal()
    defensive_contribution = _decimal()
    expected_goals = _decimal()
    expected_assists = _decimal()
    expected_goal_involvements = _decimal()
    expected_goals_conceded = _decimal()
    expected_goals_per_90 = _decimal()
    saves_per_90 = _decimal()
    expected_assists_per_90 = _decimal()
    expected_goals_conceded_per_90 = _decimal()
    goals_conceded_per_90 = _decimal()
    clean_sheets_per_90 = _decimal()
