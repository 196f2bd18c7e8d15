"""
Database Helper Utilities for Schema Migrations

Provides:
- Database dialect detection (PostgreSQL vs SQLite)
- ColumnAlteration descriptors shared by upgrade and downgrade
- Enum type lifecycle (created on upgrade, dropped on downgrade per policy)
- NULL backfill that reports the rows it had to touch

Every helper runs inside an Alembic migration context and lets database
errors propagate so the runner halts on the failing step.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

from ..config import settings
from .logging_config import get_logger

logger = get_logger(__name__)


def dialect_name(bind) -> str:
    """Dialect name of a Connection, Engine or Session"""
    dialect = getattr(bind, "dialect", None)
    if dialect is None and getattr(bind, "bind", None) is not None:
        dialect = bind.bind.dialect
    return dialect.name if dialect is not None else ""


def is_postgres(bind) -> bool:
    """Check if the database is PostgreSQL"""
    return dialect_name(bind) == 'postgresql'


def is_sqlite(bind) -> bool:
    """Check if the database is SQLite"""
    return dialect_name(bind) == 'sqlite'


@dataclass(frozen=True)
class ColumnAlteration:
    """
    One column as a migration declares it.

    The same descriptor is used to apply a change and to undo it, so a
    downgrade restores exactly the type and nullability the upgrade
    replaced. Enum columns give enum_values instead of type_.
    """
    table: str
    column: str
    type_: Any = None
    nullable: bool = True
    server_default: Optional[str] = None
    enum_values: Tuple[str, ...] = ()

    @property
    def enum_type_name(self) -> str:
        # Naming already used by enum types in deployed databases
        return f"enum_{self.table}_{self.column}"

    def column_type(self, dialect: str = "default"):
        if not self.enum_values:
            return self.type_
        if dialect == "postgresql":
            # Created explicitly by create_enum_type
            return postgresql.ENUM(*self.enum_values, name=self.enum_type_name, create_type=False)
        return sa.Enum(*self.enum_values, name=self.enum_type_name)

    def to_column(self, dialect: str = "default") -> sa.Column:
        return sa.Column(
            self.column,
            self.column_type(dialect),
            nullable=self.nullable,
            server_default=self.server_default,
        )


def create_enum_type(alteration: ColumnAlteration) -> bool:
    """Create the standalone enum type behind a column (PostgreSQL only)"""
    if not alteration.enum_values:
        return False

    bind = op.get_bind()
    if not is_postgres(bind):
        return False

    postgresql.ENUM(*alteration.enum_values, name=alteration.enum_type_name).create(bind, checkfirst=True)
    logger.migration_step(
        "create_enum", alteration.table, alteration.column,
        type_name=alteration.enum_type_name, values=list(alteration.enum_values)
    )
    return True


def add_column(alteration: ColumnAlteration, batch_op=None) -> None:
    """Add a column, creating its enum type first when it has one"""
    create_enum_type(alteration)
    column = alteration.to_column(dialect_name(op.get_bind()))

    if batch_op is not None:
        batch_op.add_column(column)
    else:
        op.add_column(alteration.table, column)

    logger.migration_step(
        "add_column", alteration.table, alteration.column,
        nullable=alteration.nullable, server_default=alteration.server_default
    )


def alter_column(alteration: ColumnAlteration, existing: ColumnAlteration, batch_op=None) -> None:
    """Change a column from the `existing` declaration to `alteration`"""
    kwargs = dict(
        existing_type=existing.type_,
        type_=alteration.type_,
        nullable=alteration.nullable,
        existing_nullable=existing.nullable,
        existing_server_default=existing.server_default,
    )
    # server_default=None would drop the default, so only pass a real one
    if alteration.server_default is not None:
        kwargs["server_default"] = alteration.server_default

    if batch_op is not None:
        batch_op.alter_column(alteration.column, **kwargs)
    else:
        op.alter_column(alteration.table, alteration.column, **kwargs)

    logger.migration_step(
        "alter_column", alteration.table, alteration.column,
        nullable=alteration.nullable, was_nullable=existing.nullable
    )


def drop_column(alteration: ColumnAlteration, batch_op=None) -> None:
    """
    Drop a column.

    existing_type tells batch mode which type (and any named constraint
    bound to it) goes away with the column.
    """
    existing_type = alteration.column_type(dialect_name(op.get_bind()))

    if batch_op is not None:
        batch_op.drop_column(alteration.column, existing_type=existing_type)
    else:
        op.drop_column(alteration.table, alteration.column, existing_type=existing_type)

    logger.migration_step("drop_column", alteration.table, alteration.column)


def backfill_nulls(table: str, column: str, value: Any) -> int:
    """
    Set `column` to `value` on every row where it is NULL.

    A NOT NULL column with a server default should never hold NULLs, so any
    matching row means something wrote around the default. Those rows are
    counted and reported before they are fixed.

    Returns the number of rows that were backfilled, always 0 when
    rendering an offline (--sql) script since nothing can be counted.
    """
    tbl = sa.table(table, sa.column(column))
    missing = tbl.c[column].is_(None)
    backfill = tbl.update().where(missing).values({column: sa.literal(value)})

    if op.get_context().as_sql:
        op.execute(backfill)
        logger.migration_step("backfill", table, column, value=value, offline=True)
        return 0

    pending = op.get_bind().execute(
        sa.select(sa.func.count()).select_from(tbl).where(missing)
    ).scalar() or 0

    if pending:
        logger.warning(
            f"Backfilling {pending} row(s) in {table}.{column} that bypassed the column default"
        )

    op.execute(backfill)
    logger.migration_step("backfill", table, column, value=value, rows=pending)
    return pending


def drop_enum_type(type_name: str, policy: Optional[str] = None) -> bool:
    """
    Drop an enum type left behind by a dropped column.

    Honors ENUM_REVERT_POLICY: with "keep" the type stays in the database.
    Only PostgreSQL has standalone enum types; elsewhere this is a no-op.

    Returns True when a DROP TYPE was issued.
    """
    policy = policy or settings.enum_revert_policy
    if policy != "drop":
        logger.info(f"Keeping enum type {type_name} (ENUM_REVERT_POLICY={policy})")
        return False

    if not is_postgres(op.get_bind()):
        return False

    op.execute(f'DROP TYPE IF EXISTS "{type_name}"')
    logger.migration_step("drop_enum", type_name, type_name=type_name)
    return True
