"""Create profiles, auth sessions and community tables

Revision ID: 20261019_000001
Revises: None
Create Date: 2026-10-19

Creates the identity tables (profiles, auth_sessions) and the community
tables (communities, community_members) plus the community_member_counts view.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create identity and community tables."""
    op.create_table(
        'profiles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('is_solar_provider', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('email_confirmed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('pending_otp', sa.String(length=10), nullable=True),
        sa.Column('otp_expires_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_profiles_email', 'profiles', ['email'], unique=True)

    op.create_table(
        'auth_sessions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('revoked_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['user_id'],
            ['profiles.id'],
            name='fk_auth_sessions_user_id',
            ondelete='CASCADE'
        ),
    )
    op.create_index('ix_auth_sessions_user_id', 'auth_sessions', ['user_id'])

    op.create_table(
        'communities',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('zip_code', sa.String(length=20), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('admin_id', sa.Integer(), nullable=False),
        sa.Column('community_code', sa.String(length=6), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['admin_id'],
            ['profiles.id'],
            name='fk_communities_admin_id',
            ondelete='NO ACTION'
        ),
    )
    op.create_index('ix_communities_zip_code', 'communities', ['zip_code'])
    op.create_index('ix_communities_admin_id', 'communities', ['admin_id'])
    op.create_index('ix_communities_community_code', 'communities', ['community_code'], unique=True)

    op.create_table(
        'community_members',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('community_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('joined_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('community_id', 'user_id', name='uq_community_members_community_user'),
        sa.ForeignKeyConstraint(
            ['community_id'],
            ['communities.id'],
            name='fk_community_members_community_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['user_id'],
            ['profiles.id'],
            name='fk_community_members_user_id',
            ondelete='CASCADE'
        ),
    )
    op.create_index('ix_community_members_community_id', 'community_members', ['community_id'])
    op.create_index('ix_community_members_user_id', 'community_members', ['user_id'])

    # Members per community, read by dashboards
    op.execute(
        "CREATE VIEW community_member_counts AS "
        "SELECT community_id, COUNT(*) AS member_count "
        "FROM community_members GROUP BY community_id"
    )


def downgrade() -> None:
    """Drop identity and community tables."""
    op.execute("DROP VIEW community_member_counts")
    op.drop_index('ix_community_members_user_id', table_name='community_members')
    op.drop_index('ix_community_members_community_id', table_name='community_members')
    op.drop_table('community_members')
    op.drop_index('ix_communities_community_code', table_name='communities')
    op.drop_index('ix_communities_admin_id', table_name='communities')
    op.drop_index('ix_communities_zip_code', table_name='communities')
    op.drop_table('communities')
    op.drop_index('ix_auth_sessions_user_id', table_name='auth_sessions')
    op.drop_table('auth_sessions')
    op.drop_index('ix_profiles_email', table_name='profiles')
    op.drop_table('profiles')
