"""initial waitlist schema: users, waitlists, subscribers

Revision ID: waitlist_initial
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

from app.core.types import GUID

# revision identifiers, used by Alembic.
revision = 'waitlist_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', GUID(), primary_key=True),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'waitlists',
        sa.Column('id', GUID(), primary_key=True),
        sa.Column('user_id', GUID(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('slug', sa.String(length=50), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('headline', sa.String(), nullable=False),
        sa.Column('subheadline', sa.String(), nullable=True),
        sa.Column('theme', sa.String(length=50), nullable=False, server_default='dark-modern'),
        sa.Column('primary_color', sa.String(length=20), nullable=False, server_default='#000000'),
        sa.Column('background_color', sa.String(length=20), nullable=False, server_default='#ffffff'),
        sa.Column('logo_url', sa.String(), nullable=True),
        sa.Column('collect_name', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('collect_company', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('countdown_enabled', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('countdown_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_waitlists_slug', 'waitlists', ['slug'], unique=True)
    op.create_index('ix_waitlists_user_id', 'waitlists', ['user_id'])

    op.create_table(
        'subscribers',
        sa.Column('id', GUID(), primary_key=True),
        sa.Column('waitlist_id', GUID(), sa.ForeignKey('waitlists.id', ondelete='CASCADE'), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=True),
        sa.Column('company', sa.String(length=200), nullable=True),
        sa.Column('custom_data', sa.Text(), nullable=True),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('waitlist_id', 'email', name='uq_subscriber_waitlist_email'),
        sa.UniqueConstraint('waitlist_id', 'position', name='uq_subscriber_waitlist_position'),
    )
    op.create_index('ix_subscribers_waitlist_id', 'subscribers', ['waitlist_id'])


def downgrade():
    op.drop_index('ix_subscribers_waitlist_id', table_name='subscribers')
    op.drop_table('subscribers')
    op.drop_index('ix_waitlists_user_id', table_name='waitlists')
    op.drop_index('ix_waitlists_slug', table_name='waitlists')
    op.drop_table('waitlists')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
