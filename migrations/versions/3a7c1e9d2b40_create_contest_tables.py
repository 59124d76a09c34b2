"""create contest tables

Revision ID: 3a7c1e9d2b40
Revises: 
Create Date: 2026-10-12 20:14:03.118204

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '3a7c1e9d2b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('users',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('username', sa.String(length=80), nullable=False),
    sa.Column('email', sa.String(length=200), nullable=False),
    sa.Column('password_hash', sa.String(length=256), nullable=False),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('email'),
    sa.UniqueConstraint('username')
    )
    op.create_table('contest_settings',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('phase', sa.String(length=20), nullable=False),
    sa.Column('star_budgets', sa.String(length=100), nullable=False),
    sa.Column('parent_weight', sa.Float(), nullable=False),
    sa.Column('max_suggestions_per_person', sa.Integer(), nullable=False),
    sa.Column('max_girl_suggestions', sa.Integer(), nullable=True),
    sa.Column('max_boy_suggestions', sa.Integer(), nullable=True),
    sa.Column('actual_gender', sa.String(length=10), nullable=False),
    sa.Column('normalization', sa.Boolean(), nullable=False),
    sa.Column('ranking_score', sa.String(length=20), nullable=False),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_table('participants',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('identity', sa.String(length=200), nullable=False),
    sa.Column('identity_key', sa.String(length=200), nullable=False),
    sa.Column('role', sa.String(length=50), nullable=False),
    sa.Column('relation', sa.String(length=100), nullable=True),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('identity_key')
    )
    op.create_table('suggestions',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('public_id', sa.String(length=32), nullable=False),
    sa.Column('name', sa.String(length=100), nullable=False),
    sa.Column('gender', sa.String(length=10), nullable=False),
    sa.Column('suggester', sa.String(length=200), nullable=False),
    sa.Column('guess', sa.String(length=10), nullable=False),
    sa.Column('relation', sa.String(length=100), nullable=False),
    sa.Column('meaning', sa.Text(), nullable=True),
    sa.Column('submitted_at', sa.DateTime(), nullable=False),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('public_id')
    )
    op.create_table('name_votes',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('name', sa.String(length=100), nullable=False),
    sa.Column('gender', sa.String(length=10), nullable=False),
    sa.Column('voter', sa.String(length=200), nullable=False),
    sa.Column('score', sa.Integer(), nullable=False),
    sa.Column('submitted_at', sa.DateTime(), nullable=False),
    sa.Column('voter_key', sa.String(length=200), nullable=False),
    sa.Column('name_key', sa.String(length=100), nullable=False),
    sa.Column('gender_key', sa.String(length=10), nullable=False),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('voter_key', 'name_key', 'gender_key', name='uq_name_votes_voter_candidate')
    )
    op.create_table('winners',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('identity', sa.String(length=200), nullable=False),
    sa.Column('actual_gender', sa.String(length=10), nullable=False),
    sa.Column('drawn_at', sa.DateTime(), nullable=False),
    sa.PrimaryKeyConstraint('id')
    )


def downgrade():
    op.drop_table('winners')
    op.drop_table('name_votes')
    op.drop_table('suggestions')
    op.drop_table('participants')
    op.drop_table('contest_settings')
    op.drop_table('users')
