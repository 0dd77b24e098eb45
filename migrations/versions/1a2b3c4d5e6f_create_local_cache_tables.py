"""create local cache tables

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '1a2b3c4d5e6f'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'local_users',
        sa.Column('handle', sa.String(length=64), nullable=False),
        sa.Column('max_rating', sa.Integer(), nullable=False),
        sa.Column('last_updated', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('handle'),
    )
    op.create_table(
        'local_problems',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('contest_id', sa.Integer(), nullable=False),
        sa.Column('index', sa.String(length=10), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('tags', sa.Text(), nullable=False),
        sa.Column('skill_level', sa.String(length=30), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(
            'contest_id', 'index', 'skill_level',
            name='uq_local_problem_contest_index_level',
        ),
    )
    with op.batch_alter_table('local_problems', schema=None) as batch_op:
        batch_op.create_index(
            batch_op.f('ix_local_problems_skill_level'), ['skill_level'], unique=False,
        )

    op.create_table(
        'local_submissions',
        sa.Column('id', sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column('handle', sa.String(length=64), nullable=False),
        sa.Column('contest_id', sa.Integer(), nullable=True),
        sa.Column('index', sa.String(length=10), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=True),
        sa.Column('tags', sa.Text(), nullable=False),
        sa.Column('verdict', sa.String(length=40), nullable=False),
        sa.Column('submission_time', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('local_submissions', schema=None) as batch_op:
        batch_op.create_index(
            batch_op.f('ix_local_submissions_handle'), ['handle'], unique=False,
        )
        batch_op.create_index(
            'ix_local_submissions_problem', ['contest_id', 'index'], unique=False,
        )


def downgrade():
    with op.batch_alter_table('local_submissions', schema=None) as batch_op:
        batch_op.drop_index('ix_local_submissions_problem')
        batch_op.drop_index(batch_op.f('ix_local_submissions_handle'))
    op.drop_table('local_submissions')

    with op.batch_alter_table('local_problems', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_local_problems_skill_level'))
    op.drop_table('local_problems')

    op.drop_table('local_users')
