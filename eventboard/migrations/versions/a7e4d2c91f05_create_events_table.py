"""Create events table

Revision ID: a7e4d2c91f05
Revises: 3f1c2a9d7b10
Create Date: 2023-08-05 09:40:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a7e4d2c91f05'
down_revision: Union[str, Sequence[str], None] = '3f1c2a9d7b10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    # INTEGER PRIMARY KEY makes id the rowid, assigned by SQLite on insert
    op.create_table(
        'events',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('color', sa.Text(), nullable=True),
        sa.Column('start_date', sa.BigInteger(), nullable=False),
        sa.Column('end_date', sa.BigInteger(), nullable=False),
        sa.Column('location_lng', sa.Float(), nullable=True),
        sa.Column('location_lat', sa.Float(), nullable=True),
        sa.Column('created_at', sa.BigInteger(), nullable=False),
        sa.Column('edited_at', sa.BigInteger(), nullable=True),
    )


def downgrade():
    op.drop_table('events')
