# src/radio_calico/scripts/migrate.py
"""Apply Alembic migrations to the configured database."""
from __future__ import annotations

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from radio_calico.core.logging import configure_logging
from radio_calico.core.settings import settings

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


def build_config(database_url: str | None = None) -> Config:
    """Return an Alembic config pointed at the project's migrations."""
    cfg = Config(str(MIGRATIONS_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    url = database_url or settings.database_url_sync
    # ConfigParser interpolation treats "%" specially.
    cfg.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    return cfg


def run_upgrade_head() -> None:
    configure_logging(settings.log_level)
    cfg = build_config()
    logger.info("Upgrading database schema to head")
    command.upgrade(cfg, "head")


if __name__ == "__main__":
    run_upgrade_head()
