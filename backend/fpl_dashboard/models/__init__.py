# Import every model here so Base.metadata sees them (create_all / alembic)
from fpl_dashboard.models.teams import Team  # noqa: F401
from fpl_dashboard.models.positions import Position  # noqa: F401
from fpl_dashboard.models.gameweeks import Gameweek  # noqa: F401
from fpl_dashboard.models.players import Player  # noqa: F401
from fpl_dashboard.models.gameweek_players import GameweekPlayer  # noqa: F401
from fpl_dashboard.models.refresh_runs import RefreshRun  # noqa: F401
