"""Add LDAP authentication fields to users

Revision ID: 002_user_auth_fields
Revises: 001_initial
Create Date: 2025-11-07

Users can now log in against LDAP:
- authType: 'ldap' or 'local', existing users become 'local'
- ldapUsername: directory account name
- password becomes nullable since LDAP users have no local password

Downgrade makes password NOT NULL again, which fails while LDAP users
without a password remain.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from ibd.utils.db_helpers import (
    ColumnAlteration,
    add_column,
    alter_column,
    drop_column,
    drop_enum_type,
)

# revision identifiers, used by Alembic.
revision: str = '002_user_auth_fields'
down_revision: Union[str, None] = '001_initial'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


AUTH_TYPE = ColumnAlteration(
    'users', 'authType',
    nullable=False,
    server_default='local',
    enum_values=('ldap', 'local'),
)
LDAP_USERNAME = ColumnAlteration('users', 'ldapUsername', sa.String(100), nullable=True)
PASSWORD_OPTIONAL = ColumnAlteration('users', 'password', sa.String(255), nullable=True)
PASSWORD_REQUIRED = ColumnAlteration('users', 'password', sa.String(255), nullable=False)


def upgrade() -> None:
    # One batch so SQLite rebuilds the table once
    with op.batch_alter_table('users') as batch_op:
        add_column(AUTH_TYPE, batch_op)
        add_column(LDAP_USERNAME, batch_op)
        alter_column(PASSWORD_OPTIONAL, existing=PASSWORD_REQUIRED, batch_op=batch_op)


def downgrade() -> None:
    with op.batch_alter_table('users') as batch_op:
        drop_column(AUTH_TYPE, batch_op)
        drop_column(LDAP_USERNAME, batch_op)
        alter_column(PASSWORD_REQUIRED, existing=PASSWORD_OPTIONAL, batch_op=batch_op)

    drop_enum_type(AUTH_TYPE.enum_type_name)
