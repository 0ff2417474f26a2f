"""Initial schema: users, questions, interviews, feedback, improvement plans

Revision ID: 0001_initial
Revises: None
Create Date: 2026-10-18 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(120)),
        sa.Column('last_name', sa.String(120)),
        sa.Column('role', sa.String(50)),
        sa.Column('improvement_plan_id', sa.Integer()),
        *_timestamps(),
    )
    op.create_table(
        'questions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('industry', sa.String(120), nullable=False),
        sa.Column('job_title', sa.String(120), nullable=False),
        sa.Column('difficulty', sa.String(20), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('sample_answer', sa.Text()),
        sa.Column('keywords', sa.JSON()),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id')),
        sa.Column('is_public', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_questions_industry', 'questions', ['industry'])
    op.create_table(
        'interviews',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('industry', sa.String(120), nullable=False),
        sa.Column('job_title', sa.String(120), nullable=False),
        sa.Column('difficulty', sa.String(20)),
        sa.Column('interview_date', sa.DateTime()),
        sa.Column('duration', sa.Integer()),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('transcript', sa.Text()),
        sa.Column('transcript_completed', sa.Boolean()),
        sa.Column('recording_url', sa.String(512)),
        sa.Column('analysis_results', sa.JSON()),
        *_timestamps(),
    )
    op.create_index('ix_interviews_user_id', 'interviews', ['user_id'])
    op.create_table(
        'interview_peer_reviewers',
        sa.Column('interview_id', sa.Integer(), sa.ForeignKey('interviews.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
    )
    op.create_table(
        'interview_questions',
        sa.Column('interview_id', sa.Integer(), sa.ForeignKey('interviews.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('question_id', sa.Integer(), sa.ForeignKey('questions.id', ondelete='CASCADE'), primary_key=True),
    )
    op.create_table(
        'feedback',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('interview_id', sa.Integer(), sa.ForeignKey('interviews.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('kind', sa.String(10), nullable=False),
        sa.Column('overall_rating', sa.Float()),
        sa.Column('content_feedback', sa.JSON()),
        sa.Column('delivery_feedback', sa.JSON()),
        sa.Column('technical_feedback', sa.JSON()),
        sa.Column('strengths', sa.JSON()),
        sa.Column('improvements', sa.JSON()),
        sa.Column('general_comments', sa.Text()),
        sa.Column('plan_applied', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_feedback_interview_id', 'feedback', ['interview_id'])
    op.create_table(
        'improvement_plans',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('goals', sa.JSON(), nullable=False),
        sa.Column('recommendations', sa.JSON(), nullable=False),
        sa.Column('latest_interview_score', sa.Float(), nullable=False),
        sa.Column('improvement_percentage', sa.Float(), nullable=False),
        sa.Column('consistent_weak_areas', sa.JSON(), nullable=False),
        sa.Column('consistent_strength_areas', sa.JSON(), nullable=False),
        sa.Column('version_id', sa.Integer(), nullable=False),
        *_timestamps(),
        # one plan per user; concurrent first-time creation relies on this
        sa.UniqueConstraint('user_id', name='uq_improvement_plans_user'),
    )


def downgrade() -> None:
    op.drop_table('improvement_plans')
    op.drop_index('ix_feedback_interview_id', table_name='feedback')
    op.drop_table('feedback')
    op.drop_table('interview_questions')
    op.drop_table('interview_peer_reviewers')
    op.drop_index('ix_interviews_user_id', table_name='interviews')
    op.drop_table('interviews')
    op.drop_index('ix_questions_industry', table_name='questions')
    op.drop_table('questions')
    op.drop_table('users')
