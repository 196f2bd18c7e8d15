"""Run the Alembic migrations for ibd-backend

Run with:
    python -m ibd.migrate upgrade [revision]
    python -m ibd.migrate downgrade <revision>
    python -m ibd.migrate current
"""
import os
import argparse
import logging
from typing import Optional

from alembic import command
from alembic.config import Config

from .config import settings
from .database import resolve_database_url
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
SCRIPT_LOCATION = os.path.join(ROOT_DIR, "alembic")


def build_alembic_config(database_url: Optional[str] = None) -> Config:
    """Alembic Config built in code, so no alembic.ini is needed"""
    config = Config()
    config.set_main_option("script_location", SCRIPT_LOCATION)
    url = database_url or resolve_database_url()
    # ConfigParser interpolation treats % specially
    config.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    return config


def upgrade(revision: str = "head", database_url: Optional[str] = None) -> None:
    """Apply migrations up to `revision`"""
    logger.info(f"Upgrading database to {revision}")
    command.upgrade(build_alembic_config(database_url), revision)


def downgrade(revision: str, database_url: Optional[str] = None) -> None:
    """Revert migrations down to `revision`"""
    logger.info(
        f"Downgrading database to {revision} (ENUM_REVERT_POLICY={settings.enum_revert_policy})"
    )
    command.downgrade(build_alembic_config(database_url), revision)


def current(database_url: Optional[str] = None) -> None:
    """Print the revision the database is at"""
    command.current(build_alembic_config(database_url), verbose=True)


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Run ibd-backend schema migrations")
    parser.add_argument("--database-url", help="Override DATABASE_URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    up = subparsers.add_parser("upgrade", help="Apply migrations")
    up.add_argument("revision", nargs="?", default="head")

    down = subparsers.add_parser("downgrade", help="Revert migrations")
    down.add_argument("revision")

    subparsers.add_parser("current", help="Show current revision")

    args = parser.parse_args(argv)
    setup_logging(settings.log_level, json_format=settings.log_json)

    if args.command == "upgrade":
        upgrade(args.revision, args.database_url)
    elif args.command == "downgrade":
        downgrade(args.revision, args.database_url)
    else:
        current(args.database_url)


if __name__ == "__main__":
    main()
