"""Apply database migrations.

Run once per deploy, before starting the web process:

    python -m fpl_dashboard.db.init_db
"""
import argparse
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from fpl_dashboard.core.config import settings
from fpl_dashboard.core.logging_config import configure_logging

logger = logging.getLogger(__name__)

BACKEND_DIR = Path(__file__).resolve().parents[2]


def alembic_config(database_url: str | None = None) -> Config:
    cfg = Config(str(BACKEND_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(BACKEND_DIR / "migrations"))
    # configparser interpolation: escape % in passwords
    cfg.set_main_option("sqlalchemy.url", (database_url or settings.database_url).replace("%", "%%"))
    return cfg


def init_db(database_url: str | None = None, revision: str = "head") -> None:
    logger.info("Upgrading schema to %s", revision)
    command.upgrade(alembic_config(database_url), revision)


def main():
    ap = argparse.ArgumentParser(description="Apply snapshot schema migrations")
    ap.add_argument("--database-url", default=None)
    ap.add_argument("--revision", default="head")
    args = ap.parse_args()

    configure_logging()
    init_db(args.database_url, args.revision)


if __name__ == "__main__":
    main()
