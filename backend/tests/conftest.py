import os

# Must be set before fpl_dashboard.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["ADMIN_API_KEY"] = ""

import copy

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fpl_dashboard.db.base import Base
from fpl_dashboard.db.session import get_db, make_engine
import fpl_dashboard.models  # noqa: F401


def make_element(fpl_id, first_name, second_name, team_code, element_type, **stats):
    el = {
        "id": fpl_id,
        "first_name": first_name,
        "second_name": second_name,
        "team_code": team_code,
        "element_type": element_type,
        "now_cost": 50,
        "total_points": 0,
        "starts": 0,
        "minutes": 0,
        # the feed sends decimals as strings
        "form": "0.0",
        "selected_by_percent": "1.5",
        "expected_goals": "0.00",
        "expected_goals_per_90": 0.0,
    }
    el.update(stats)
    return el


BASE_PAYLOAD = {
    "events": [
        {"id": 4, "name": "Gameweek 4", "deadline_time": "2026-09-13T10:00:00Z",
         "is_current": False, "is_next": False, "is_previous": True, "finished": True},
        {"id": 5, "name": "Gameweek 5", "deadline_time": "2026-09-20T10:00:00Z",
         "is_current": True, "is_next": False, "is_previous": False, "finished": False},
        {"id": 6, "name": "Gameweek 6", "deadline_time": "2026-09-27T10:00:00Z",
         "is_current": False, "is_next": True, "is_previous": False, "finished": False},
    ],
    "teams": [
        {"id": 1, "code": 3, "name": "Arsenal", "short_name": "ARS"},
        {"id": 12, "code": 14, "name": "Liverpool", "short_name": "LIV"},
    ],
    "element_types": [
        {"id": 1, "singular_name": "Goalkeeper", "plural_name": "Goalkeepers"},
        {"id": 2, "singular_name": "Defender", "plural_name": "Defenders"},
        {"id": 3, "singular_name": "Midfielder", "plural_name": "Midfielders"},
    ],
    "elements": [
        make_element(1, "A", "B", 3, 2, total_points=50, now_cost=55, starts=32),
        make_element(2, "Mohamed", "Salah", 14, 3, total_points=120, now_cost=130, starts=25,
                     form="8.5", expected_goals="12.34"),
        make_element(3, "David", "Raya", 3, 1, total_points=80, now_cost=55, starts=12),
    ],
}


@pytest.fixture
def payload():
    return copy.deepcopy(BASE_PAYLOAD)


@pytest.fixture
def engine():
    eng = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    from fpl_dashboard.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def element():
    return make_element
