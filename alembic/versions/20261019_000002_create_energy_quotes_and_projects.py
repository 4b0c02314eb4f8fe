"""Create energy, quote, voting and project tables

Revision ID: 20261019_000002
Revises: 20261019_000001
Create Date: 2026-10-19

Creates energy_consumption, quote_requests, provider_quotes, votes,
selected_providers and projects.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000002'
down_revision: Union[str, None] = '20261019_000001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create energy, quote, voting and project tables."""
    op.create_table(
        'energy_consumption',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('community_id', sa.Integer(), nullable=False),
        sa.Column('period', sa.String(length=20), nullable=False),
        sa.Column('period_start', sa.Date(), nullable=False),
        sa.Column('period_end', sa.Date(), nullable=False),
        sa.Column('units_consumed', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('bill_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['user_id'],
            ['profiles.id'],
            name='fk_energy_consumption_user_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['community_id'],
            ['communities.id'],
            name='fk_energy_consumption_community_id',
            ondelete='CASCADE'
        ),
    )
    op.create_index('ix_energy_consumption_user_id', 'energy_consumption', ['user_id'])
    op.create_index('ix_energy_consumption_community_id', 'energy_consumption', ['community_id'])
    op.create_index('ix_energy_consumption_period_start', 'energy_consumption', ['period_start'])

    op.create_table(
        'quote_requests',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('community_id', sa.Integer(), nullable=False),
        sa.Column('requested_by', sa.Integer(), nullable=False),
        sa.Column(
            'status',
            sa.Enum('open', 'closed', name='quote_request_status', create_constraint=True),
            nullable=False,
            server_default='open'
        ),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('closed_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['community_id'],
            ['communities.id'],
            name='fk_quote_requests_community_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['requested_by'],
            ['profiles.id'],
            name='fk_quote_requests_requested_by',
            ondelete='NO ACTION'
        ),
    )
    op.create_index('ix_quote_requests_community_id', 'quote_requests', ['community_id'])
    op.create_index('ix_quote_requests_status', 'quote_requests', ['status'])

    op.create_table(
        'provider_quotes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('quote_request_id', sa.Integer(), nullable=False),
        sa.Column('provider_id', sa.Integer(), nullable=False),
        sa.Column('total_cost', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('details', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('quote_request_id', 'provider_id', name='uq_provider_quotes_request_provider'),
        sa.ForeignKeyConstraint(
            ['quote_request_id'],
            ['quote_requests.id'],
            name='fk_provider_quotes_quote_request_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['provider_id'],
            ['profiles.id'],
            name='fk_provider_quotes_provider_id',
            ondelete='NO ACTION'
        ),
    )
    op.create_index('ix_provider_quotes_quote_request_id', 'provider_quotes', ['quote_request_id'])
    op.create_index('ix_provider_quotes_provider_id', 'provider_quotes', ['provider_id'])

    op.create_table(
        'votes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('quote_request_id', sa.Integer(), nullable=False),
        sa.Column('provider_quote_id', sa.Integer(), nullable=False),
        sa.Column('voter_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['quote_request_id'],
            ['quote_requests.id'],
            name='fk_votes_quote_request_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['provider_quote_id'],
            ['provider_quotes.id'],
            name='fk_votes_provider_quote_id',
            ondelete='NO ACTION'
        ),
        sa.ForeignKeyConstraint(
            ['voter_id'],
            ['profiles.id'],
            name='fk_votes_voter_id',
            ondelete='NO ACTION'
        ),
    )
    op.create_index('ix_votes_quote_request_id', 'votes', ['quote_request_id'])
    op.create_index('ix_votes_provider_quote_id', 'votes', ['provider_quote_id'])
    op.create_index('ix_votes_voter_id', 'votes', ['voter_id'])

    op.create_table(
        'selected_providers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('quote_request_id', sa.Integer(), nullable=False),
        sa.Column('provider_quote_id', sa.Integer(), nullable=False),
        sa.Column('provider_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['quote_request_id'],
            ['quote_requests.id'],
            name='fk_selected_providers_quote_request_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['provider_quote_id'],
            ['provider_quotes.id'],
            name='fk_selected_providers_provider_quote_id',
            ondelete='NO ACTION'
        ),
        sa.ForeignKeyConstraint(
            ['provider_id'],
            ['profiles.id'],
            name='fk_selected_providers_provider_id',
            ondelete='NO ACTION'
        ),
    )
    op.create_index(
        'ix_selected_providers_quote_request_id', 'selected_providers', ['quote_request_id'], unique=True
    )

    op.create_table(
        'projects',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('community_id', sa.Integer(), nullable=False),
        sa.Column('provider_id', sa.Integer(), nullable=False),
        sa.Column(
            'status',
            sa.Enum(
                'planning', 'procurement', 'installation', 'completed',
                name='project_status',
                create_constraint=True,
            ),
            nullable=False,
            server_default='planning'
        ),
        sa.Column('progress_percentage', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_cost', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('estimated_completion_date', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['community_id'],
            ['communities.id'],
            name='fk_projects_community_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['provider_id'],
            ['profiles.id'],
            name='fk_projects_provider_id',
            ondelete='NO ACTION'
        ),
    )
    op.create_index('ix_projects_community_id', 'projects', ['community_id'])
    op.create_index('ix_projects_provider_id', 'projects', ['provider_id'])
    op.create_index('ix_projects_status', 'projects', ['status'])


def downgrade() -> None:
    """Drop energy, quote, voting and project tables."""
    op.drop_index('ix_projects_status', table_name='projects')
    op.drop_index('ix_projects_provider_id', table_name='projects')
    op.drop_index('ix_projects_community_id', table_name='projects')
    op.drop_table('projects')
    op.drop_index('ix_selected_providers_quote_request_id', table_name='selected_providers')
    op.drop_table('selected_providers')
    op.drop_index('ix_votes_voter_id', table_name='votes')
    op.drop_index('ix_votes_provider_quote_id', table_name='votes')
    op.drop_index('ix_votes_quote_request_id', table_name='votes')
    op.drop_table('votes')
    op.drop_index('ix_provider_quotes_provider_id', table_name='provider_quotes')
    op.drop_index('ix_provider_quotes_quote_request_id', table_name='provider_quotes')
    op.drop_table('provider_quotes')
    op.drop_index('ix_quote_requests_status', table_name='quote_requests')
    op.drop_index('ix_quote_requests_community_id', table_name='quote_requests')
    op.drop_table('quote_requests')
    op.drop_index('ix_energy_consumption_period_start', table_name='energy_consumption')
    op.drop_index('ix_energy_consumption_community_id', table_name='energy_consumption')
    op.drop_index('ix_energy_consumption_user_id', table_name='energy_consumption')
    op.drop_table('energy_consumption')
