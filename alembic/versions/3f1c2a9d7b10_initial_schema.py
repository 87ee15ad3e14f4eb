"""initial schema

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2025-06-02 19:41:08.112904

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('title', sa.String(), nullable=False, server_default='member'),
        sa.Column('educational_institution', sa.String(), nullable=False),
        sa.Column('class', sa.String(), nullable=False),
        sa.Column('address', sa.String(), nullable=False),
        sa.Column('phone_number', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'monthly_reports',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('month', sa.String(), nullable=False),
        sa.Column('year', sa.String(), nullable=False),
        sa.Column('qa', sa.JSON(), nullable=False),
        sa.Column('is_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('user_id', 'month', 'year', name='uq_report_user_month_year'),
    )
    op.create_index('ix_monthly_reports_id', 'monthly_reports', ['id'])
    op.create_index('ix_monthly_reports_user_id', 'monthly_reports', ['user_id'])

    # Days start out without their own month/year (added in 8a4e61c0d2f5)
    op.create_table(
        'report_days',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('report_id', sa.Integer(), sa.ForeignKey('monthly_reports.id', ondelete='CASCADE'), nullable=False),
        sa.Column('date', sa.Integer(), nullable=False),
        sa.Column('namaz', sa.String(), nullable=False, server_default='no'),
        sa.Column('hifz', sa.String(), nullable=False, server_default='no'),
        sa.Column('nazra', sa.String(), nullable=False, server_default='no'),
        sa.Column('tafseer', sa.String(), nullable=False, server_default='no'),
        sa.Column('hadees', sa.String(), nullable=False, server_default='no'),
        sa.Column('literature', sa.String(), nullable=False, server_default='no'),
        sa.Column('darsi_kutab', sa.String(), nullable=False, server_default='no'),
        sa.Column('karkunaan_mulakaat', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('amoomi_afraad_mulakaat', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('khatoot_tadaad', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('ghr_ka_kaam', sa.String(), nullable=False, server_default='no'),
    )
    op.create_index('ix_report_days_id', 'report_days', ['id'])
    op.create_index('ix_report_days_report_id', 'report_days', ['report_id'])


def downgrade() -> None:
    op.drop_table('report_days')
    op.drop_table('monthly_reports')
    op.drop_table('users')
