"""initial schema: admins and srp_requests

Revision ID: 001
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Detect database type
    bind = op.get_bind()
    is_sqlite = bind.dialect.name == 'sqlite'

    # Choose appropriate timestamp default
    timestamp_default = sa.text("(datetime('now'))") if is_sqlite else sa.text('now()')

    # ------------------------------------------------------------------
    # admins (the environment superadmin is never stored here)
    # ------------------------------------------------------------------
    op.create_table(
        'admins',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=32), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='admin'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=timestamp_default),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_admins_username', 'admins', ['username'], unique=True)

    # ------------------------------------------------------------------
    # srp_requests
    # ------------------------------------------------------------------
    op.create_table(
        'srp_requests',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('char_id', sa.BigInteger(), nullable=False),
        sa.Column('char_name', sa.String(length=255), nullable=False),
        sa.Column('killmail_id', sa.BigInteger(), nullable=False),
        sa.Column('ship_type_id', sa.Integer(), nullable=False),
        sa.Column('zkill_url', sa.String(length=255), nullable=False),
        sa.Column('player_comment', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('payout_amount', sa.Numeric(20, 2), nullable=False, server_default='0'),
        sa.Column('admin_comment', sa.Text(), nullable=True),
        sa.Column('reviewed_by', sa.String(length=32), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=timestamp_default),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('killmail_id'),
    )
    op.create_index('ix_srp_requests_id', 'srp_requests', ['id'])
    op.create_index('ix_srp_requests_char_id', 'srp_requests', ['char_id'])
    op.create_index('ix_srp_requests_status', 'srp_requests', ['status'])
    op.create_index('ix_srp_requests_created_at', 'srp_requests', ['created_at'])


def downgrade() -> None:
    op.drop_index('ix_srp_requests_created_at', table_name='srp_requests')
    op.drop_index('ix_srp_requests_status', table_name='srp_requests')
    op.drop_index('ix_srp_requests_char_id', table_name='srp_requests')
    op.drop_index('ix_srp_requests_id', table_name='srp_requests')
    op.drop_table('srp_requests')

    op.drop_index('ix_admins_username', table_name='admins')
    op.drop_table('admins')
