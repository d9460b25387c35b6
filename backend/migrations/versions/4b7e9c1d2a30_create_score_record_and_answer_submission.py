"""create score_record and answer_submission

Revision ID: 4b7e9c1d2a30
Revises:
Create Date: 2026-02-18 09:30:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4b7e9c1d2a30'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'score_record' not in existing_tables:
        op.create_table(
            'score_record',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('task_id', sa.String(length=64), nullable=False),
            sa.Column('date', sa.String(length=32), nullable=False),
            sa.Column('correct', sa.Integer(), nullable=False),
            sa.Column('total', sa.Integer(), nullable=False),
            sa.Column('pct', sa.Integer(), nullable=False),
            sa.Column('elapsed_seconds', sa.Integer(), nullable=True),
            sa.Column('question_file', sa.String(length=255), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        )
        op.create_index('ix_score_record_task_id', 'score_record', ['task_id'])

    if 'answer_submission' not in existing_tables:
        op.create_table(
            'answer_submission',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('answer_id', sa.String(length=32), nullable=False),
            sa.Column('task_id', sa.String(length=64), nullable=False),
            sa.Column('problem_id', sa.String(length=255), nullable=False),
            sa.Column('response', sa.Text(), nullable=False),
            sa.Column('question', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        )
        op.create_index('ix_answer_submission_answer_id', 'answer_submission', ['answer_id'], unique=True)
        op.create_index('ix_answer_submission_problem_id', 'answer_submission', ['problem_id'])


def downgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'answer_submission' in existing_tables:
        op.drop_index('ix_answer_submission_problem_id', table_name='answer_submission')
        op.drop_index('ix_answer_submission_answer_id', table_name='answer_submission')
        op.drop_table('answer_submission')
    if 'score_record' in existing_tables:
        op.drop_index('ix_score_record_task_id', table_name='score_record')
        op.drop_table('score_record')
