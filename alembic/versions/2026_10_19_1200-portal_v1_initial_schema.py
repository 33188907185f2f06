"""Initial schema: users, internship roles, applications and FAQs

Revision ID: portal_v1
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = 'portal_v1'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='admin'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'])
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_created_at'), 'users', ['created_at'])

    op.create_table(
        'internship_roles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('department', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('requirements', sa.Text(), nullable=False, server_default=''),
        sa.Column('location', sa.String(length=255), nullable=False, server_default='Remote'),
        sa.Column('duration', sa.Integer(), nullable=False, server_default='3'),
        sa.Column('stipend', sa.Numeric(12, 2), nullable=False, server_default='25000'),
        sa.Column('application_deadline', sa.Date(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_internship_roles_id'), 'internship_roles', ['id'])
    op.create_index(op.f('ix_internship_roles_title'), 'internship_roles', ['title'])
    op.create_index(op.f('ix_internship_roles_created_at'), 'internship_roles', ['created_at'])

    # No foreign key on role_id: applications outlive their role
    op.create_table(
        'applications',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('role_id', sa.Uuid(), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=False),
        sa.Column('university', sa.String(length=255), nullable=False),
        sa.Column('course', sa.String(length=255), nullable=False),
        sa.Column('year', sa.String(length=10), nullable=False),
        sa.Column('cgpa', sa.Float(), nullable=False),
        sa.Column('motivation', sa.Text(), nullable=False),
        sa.Column('resume_url', sa.String(length=500), nullable=False),
        sa.Column('ai_score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('ai_feedback', sa.String(length=500), nullable=False, server_default=''),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            "status IN ('pending', 'shortlisted', 'rejected', 'accepted')",
            name='ck_applications_status',
        ),
        sa.CheckConstraint('ai_score BETWEEN 0 AND 100', name='ck_applications_ai_score'),
    )
    op.create_index(op.f('ix_applications_id'), 'applications', ['id'])
    op.create_index(op.f('ix_applications_role_id'), 'applications', ['role_id'])
    op.create_index(op.f('ix_applications_email'), 'applications', ['email'])
    op.create_index(op.f('ix_applications_status'), 'applications', ['status'])
    op.create_index(op.f('ix_applications_created_at'), 'applications', ['created_at'])

    op.create_table(
        'faqs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('question', sa.String(length=500), nullable=False),
        sa.Column('answer', sa.Text(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_faqs_id'), 'faqs', ['id'])
    op.create_index(op.f('ix_faqs_question'), 'faqs', ['question'])
    op.create_index(op.f('ix_faqs_created_at'), 'faqs', ['created_at'])


def downgrade() -> None:
    op.drop_table('faqs')
    op.drop_table('applications')
    op.drop_table('internship_roles')
    op.drop_table('users')
