"""
Initial snapshot schema: reference tables, player snapshots, refresh runs

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-17
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None

INT_STATS = (
    'now_cost', 'total_points', 'minutes', 'goals_scored', 'assists', 'clean_sheets',
    'goals_conceded', 'own_goals', 'penalties_saved', 'penalties_missed', 'yellow_cards',
    'red_cards', 'saves', 'bonus', 'starts',
)

DECIMAL_STATS = (
    'form', 'points_per_game', 'value_form', 'value_season', 'selected_by_percent',
    'influence', 'creativity', 'threat', 'ict_index', 'defensive_contribution',
    'expected_goals', 'expected_assists', 'expected_goal_involvements',
    'expected_goals_conceded', 'expected_goals_per_90', 'saves_per_90',
    'expected_assists_per_90', 'expected_goals_conceded_per_90',
    'goals_conceded_per_90', 'clean_sheets_per_90',
)


def _stat_columns():
    cols = [sa.Column(name, sa.Integer(), nullable=True) for name in INT_STATS]
    cols += [sa.Column(name, sa.Numeric(10, 2), nullable=True) for name in DECIMAL_STATS]
    return cols


def upgrade() -> None:
    op.create_table(
        'teams',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('team_code', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('short_name', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('team_code', name='uq_teams_team_code'),
    )
    op.create_index('ix_teams_id', 'teams', ['id'])

    op.create_table(
        'positions',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('position_id', sa.Integer(), nullable=False),
        sa.Column('singular_name', sa.String(length=50), nullable=False),
        sa.Column('plural_name', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('position_id', name='uq_positions_position_id'),
    )
    op.create_index('ix_positions_id', 'positions', ['id'])

    op.create_table(
        'gameweeks',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('gameweek_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('deadline_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_current', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_next', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_previous', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('finished', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('gameweek_id', name='uq_gameweeks_gameweek_id'),
    )
    op.create_index('ix_gameweeks_id', 'gameweeks', ['id'])

    op.create_table(
        'players',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('fpl_id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('second_name', sa.String(length=100), nullable=False),
        sa.Column('team_code', sa.Integer(), sa.ForeignKey('teams.team_code'), nullable=False),
        sa.Column('position_id', sa.Integer(), sa.ForeignKey('positions.position_id'), nullable=False),
        *_stat_columns(),
        sa.Column('last_updated', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('fpl_id', name='uq_players_fpl_id'),
    )
    op.create_index('ix_players_id', 'players', ['id'])
    op.create_index('ix_players_team_code', 'players', ['team_code'])
    op.create_index('ix_players_position_id', 'players', ['position_id'])
    op.create_index('ix_players_total_points', 'players', ['total_points'])

    op.create_table(
        'gameweek_players',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('fpl_id', sa.Integer(), nullable=False),
        sa.Column('gameweek_id', sa.Integer(), sa.ForeignKey('gameweeks.gameweek_id'), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('second_name', sa.String(length=100), nullable=False),
        sa.Column('team_code', sa.Integer(), sa.ForeignKey('teams.team_code'), nullable=False),
        sa.Column('position_id', sa.Integer(), sa.ForeignKey('positions.position_id'), nullable=False),
        *_stat_columns(),
        sa.Column('last_updated', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('fpl_id', 'gameweek_id', name='uq_gameweek_players_player_gw'),
    )
    op.create_index('ix_gameweek_players_id', 'gameweek_players', ['id'])
    op.create_index('ix_gameweek_players_fpl_id', 'gameweek_players', ['fpl_id'])
    op.create_index('ix_gameweek_players_gameweek_id', 'gameweek_players', ['gameweek_id'])
    op.create_index('ix_gameweek_players_total_points', 'gameweek_players', ['total_points'])

    op.create_table(
        'refresh_runs',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('trigger', sa.String(length=16), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('finished_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('gameweek_id', sa.Integer(), nullable=True),
        sa.Column('players_updated', sa.Integer(), nullable=True),
        sa.Column('error', sa.Text(), nullable=True),
    )
    op.create_index('ix_refresh_runs_id', 'refresh_runs', ['id'])
    op.create_index('ix_refresh_runs_status', 'refresh_runs', ['status'])
    op.create_index('ix_refresh_runs_finished_at', 'refresh_runs', ['finished_at'])


def downgrade() -> None:
    op.drop_table('refresh_runs')
    op.drop_table('gameweek_players')
    op.drop_table('players')
    op.drop_table('gameweeks')
    op.drop_table('positions')
    op.drop_table('teams')
