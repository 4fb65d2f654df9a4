"""Create users table

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2023-04-13 21:23:48.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    # Username is the primary key, compared case-insensitively
    op.create_table(
        'users',
        sa.Column('username', sa.Text(collation='NOCASE'), primary_key=True, nullable=False),
        sa.Column('created_at', sa.BigInteger(), nullable=False),
    )


def downgrade():
    op.drop_table('users')
