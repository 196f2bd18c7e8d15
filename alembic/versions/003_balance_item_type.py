"""Add balance_type to balance_items

Revision ID: 003_balance_item_type
Revises: 002_user_auth_fields
Create Date: 2025-11-12

Splits balance items into on- and off-balance-sheet. Existing items
are on the balance sheet.

The column is NOT NULL with a default, so the backfill only finds rows
if something wrote NULLs around the default. backfill_nulls logs a
warning with the row count when that happens.
"""
from typing import Sequence, Union

from alembic import op

from ibd.utils.db_helpers import (
    ColumnAlteration,
    add_column,
    backfill_nulls,
    drop_column,
    drop_enum_type,
)

# revision identifiers, used by Alembic.
revision: str = '003_balance_item_type'
down_revision: Union[str, None] = '002_user_auth_fields'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


BALANCE_TYPE = ColumnAlteration(
    'balance_items', 'balance_type',
    nullable=False,
    server_default='on_balance_sheet',
    enum_values=('on_balance_sheet', 'off_balance_sheet'),
)


def upgrade() -> None:
    add_column(BALANCE_TYPE)
    backfill_nulls('balance_items', 'balance_type', 'on_balance_sheet')


def downgrade() -> None:
    with op.batch_alter_table('balance_items') as batch_op:
        drop_column(BALANCE_TYPE, batch_op)

    drop_enum_type(BALANCE_TYPE.enum_type_name)
