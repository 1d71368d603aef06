from pydantic import BaseModel


class AnalysisPlayerOut(BaseModel):
    fpl_id: int
    name: str
    position_id: int
    position_name: str | None = None
    team_name: str | None = None
    starts: int
    category: str
    price: float
    points: int


class AnalysisOut(BaseModel):
    category: str
    position_id: int | None = None
    counts: dict[str, int]
    median_price: float
    median_points: int
    players: list[AnalysisPlayerOut]
