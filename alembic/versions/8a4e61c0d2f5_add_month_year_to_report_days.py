"""add month and year to report_days

Revision ID: 8a4e61c0d2f5
Revises: 3f1c2a9d7b10
Create Date: 2025-07-14 11:06:52.480317

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8a4e61c0d2f5'
down_revision: Union[str, None] = '3f1c2a9d7b10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Nullable: existing rows are backfilled from their report the next time
    # the report is read (services/report_lifecycle.py).
    op.add_column('report_days', sa.Column('month', sa.String(), nullable=True))
    op.add_column('report_days', sa.Column('year', sa.String(), nullable=True))


def downgrade() -> None:
    op.drop_column('report_days', 'year')
    op.drop_column('report_days', 'month')
