"""create_profile_tables

Revision ID: 4b7d1e9a2c60
Revises:
Create Date: 2026-10-19 10:12:31.418207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '4b7d1e9a2c60'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, profiles, sections, experiences and analytics tables."""
    op.create_table('users',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('email', sa.String(length=255), server_default='', nullable=False),
        sa.Column('display_name', sa.String(length=100), nullable=True),
        sa.Column('plan_id', sa.String(length=20), server_default='free', nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint("plan_id IN ('free', 'pro')", name='ck_users_plan_id'),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table('profiles',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('username', sa.String(length=20), nullable=False),
        sa.Column('published', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('display_name', sa.String(length=100), nullable=True),
        sa.Column('headline', sa.String(length=200), nullable=True),
        sa.Column('location', sa.String(length=100), nullable=True),
        sa.Column('profile_photo_url', sa.String(length=500), nullable=True),
        sa.Column('accent_color', sa.String(length=20), nullable=True),
        sa.Column('layout_style', sa.String(length=50), nullable=True),
        sa.Column('github_url', sa.String(length=500), nullable=True),
        sa.Column('linkedin_url', sa.String(length=500), nullable=True),
        sa.Column('website_url', sa.String(length=500), nullable=True),
        sa.Column('twitter_url', sa.String(length=500), nullable=True),
        sa.Column('seo_title', sa.String(length=200), nullable=True),
        sa.Column('seo_description', sa.String(length=500), nullable=True),
        sa.Column('seo_keywords', postgresql.JSONB(astext_type=sa.Text()), server_default='[]', nullable=False),
        sa.Column('remove_branding', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('views', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('username = lower(username)', name='ck_profiles_username_lowercase'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', name='uq_profiles_user_id'),
        sa.UniqueConstraint('username', name='uq_profiles_username'),
    )

    op.create_table('profile_sections',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('profile_id', sa.UUID(), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('content', postgresql.JSONB(astext_type=sa.Text()), server_default='{}', nullable=False),
        sa.Column('order', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_profile_sections_profile_order', 'profile_sections', ['profile_id', 'order'], unique=False)

    op.create_table('profile_experiences',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('profile_id', sa.UUID(), nullable=False),
        sa.Column('company', sa.String(length=200), nullable=False),
        sa.Column('role', sa.String(length=200), nullable=False),
        sa.Column('start_date', sa.String(length=20), nullable=False),
        sa.Column('end_date', sa.String(length=20), nullable=True),
        sa.Column('description', sa.Text(), server_default='', nullable=False),
        sa.Column('tech_stack', postgresql.JSONB(astext_type=sa.Text()), server_default='[]', nullable=False),
        sa.Column('location', sa.String(length=100), nullable=True),
        sa.Column('order', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_profile_experiences_profile_order', 'profile_experiences', ['profile_id', 'order'], unique=False)

    op.create_table('analytics_events',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('profile_id', sa.UUID(), nullable=False),
        sa.Column('event_type', sa.String(length=50), nullable=False),
        sa.Column('referrer', sa.String(length=500), nullable=True),
        sa.Column('user_agent', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_analytics_events_profile_created', 'analytics_events', ['profile_id', 'created_at'], unique=False)


def downgrade() -> None:
    """Drop profile tables in dependency order."""
    op.drop_index('ix_analytics_events_profile_created', table_name='analytics_events')
    op.drop_table('analytics_events')
    op.drop_index('ix_profile_experiences_profile_order', table_name='profile_experiences')
    op.drop_table('profile_experiences')
    op.drop_index('ix_profile_sections_profile_order', table_name='profile_sections')
    op.drop_table('profile_sections')
    op.drop_table('profiles')
    op.drop_table('users')
