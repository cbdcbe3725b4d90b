"""create user, match, payment, admin_session and tick_checkpoint tables

Revision ID: 1a7c9e2b4d60
Revises:
Create Date: 2025-09-02 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '1a7c9e2b4d60'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('password_hash', sa.String(length=256), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_payment_confirmed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_user_email', 'user', ['email'], unique=True)

    op.create_table(
        'match',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
        sa.Column('team1_name', sa.String(length=64), nullable=False),
        sa.Column('team2_name', sa.String(length=64), nullable=False),
        sa.Column('team1_logo_url', sa.String(length=512), nullable=True),
        sa.Column('team2_logo_url', sa.String(length=512), nullable=True),
        sa.Column('team1_score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('team2_score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('timer_duration', sa.Integer(), nullable=False),
        sa.Column('current_time', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_timer_running', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('current_half', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('half_time_offset', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_visible', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('design_theme', sa.String(length=16), nullable=False, server_default='classic'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_match_user_id', 'match', ['user_id'])
    op.create_index('ix_match_is_timer_running', 'match', ['is_timer_running'])

    op.create_table(
        'payment',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='pending'),
        sa.Column('payment_method', sa.String(length=64), nullable=True),
        sa.Column('transaction_id', sa.String(length=128), nullable=True),
        sa.Column('reviewed_by', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_payment_user_id', 'payment', ['user_id'])

    op.create_table(
        'admin_session',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('admin_email', sa.String(length=255), nullable=False),
        sa.Column('session_token', sa.String(length=64), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_admin_session_session_token', 'admin_session', ['session_token'], unique=True)

    op.create_table(
        'tick_checkpoint',
        sa.Column('name', sa.String(length=32), primary_key=True),
        sa.Column('last_wake_at', sa.Float(), nullable=False),
    )


def downgrade():
    op.drop_table('tick_checkpoint')
    op.drop_index('ix_admin_session_session_token', table_name='admin_session')
    op.drop_table('admin_session')
    op.drop_index('ix_payment_user_id', table_name='payment')
    op.drop_table('payment')
    op.drop_index('ix_match_is_timer_running', table_name='match')
    op.drop_index('ix_match_user_id', table_name='match')
    op.drop_table('match')
    op.drop_index('ix_user_email', table_name='user')
    op.drop_table('user')
