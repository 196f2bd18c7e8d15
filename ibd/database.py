import os
import logging
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base

from .config import settings

logger = logging.getLogger(__name__)


def resolve_database_url(default: Optional[str] = None) -> str:
    """
    Work out which database to talk to.

    Order:
    - DATABASE_URL directly
    - PG* variables (PGHOST, PGPORT, etc.)
    - the configured default (SQLite for local development)

    postgres:// is rewritten to postgresql:// for SQLAlchemy.
    """
    database_url = os.environ.get("DATABASE_URL")

    if not database_url:
        pg_host = os.environ.get("PGHOST")
        pg_port = os.environ.get("PGPORT", "5432")
        pg_user = os.environ.get("PGUSER") or os.environ.get("POSTGRES_USER")
        pg_password = os.environ.get("PGPASSWORD") or os.environ.get("POSTGRES_PASSWORD")
        pg_database = os.environ.get("PGDATABASE") or os.environ.get("POSTGRES_DB")

        if pg_host and pg_user and pg_password and pg_database:
            database_url = f"postgresql://{pg_user}:{pg_password}@{pg_host}:{pg_port}/{pg_database}"
            logger.info(f"Built DATABASE_URL from PG* variables: {pg_host}:{pg_port}/{pg_database}")
        else:
            database_url = default or settings.database_url

    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)

    return database_url


def build_engine(database_url: str, **kwargs):
    """Create an engine, handling the SQLite check_same_thread special case"""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}

    return create_engine(
        database_url,
        connect_args=connect_args,
        pool_pre_ping=True,
        **kwargs
    )


Base = declarative_base()
