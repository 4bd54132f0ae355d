"""interview processes, job templates, user logs and notifications

Revision ID: 20260301_0000
Revises: 20260101_0000
Create Date: 2026-03-01 00:00:00.000000+00:00

"""
from alembic import op
import sqlalchemy as sa

from careers.database_types import GUID, JSON


revision = '20260301_0000'
down_revision = '20260101_0000'
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'interview_processes',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('company_id', GUID(), nullable=False),
        sa.Column('job_role_id', GUID(), nullable=False),
        sa.Column('stages', JSON(), nullable=False),
        sa.Column('created_by_id', GUID(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['job_role_id'], ['job_roles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['created_by_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    for column in ('company_id', 'job_role_id'):
        op.create_index(op.f(f'ix_interview_processes_{column}'), 'interview_processes', [column], unique=False)

    with op.batch_alter_table('interviews') as batch_op:
        batch_op.add_column(sa.Column('interview_process_id', GUID(), nullable=True))
        batch_op.create_foreign_key(
            'fk_interviews_interview_process_id', 'interview_processes',
            ['interview_process_id'], ['id'], ondelete='SET NULL'
        )
        batch_op.create_index(op.f('ix_interviews_interview_process_id'), ['interview_process_id'], unique=False)

    op.create_table(
        'job_templates',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('company_id', GUID(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('job_role_id', GUID(), nullable=False),
        sa.Column('department_id', GUID(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['job_role_id'], ['job_roles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['department_id'], ['departments.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    for column in ('company_id', 'job_role_id', 'department_id'):
        op.create_index(op.f(f'ix_job_templates_{column}'), 'job_templates', [column], unique=False)

    op.create_table(
        'user_logs',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('company_id', GUID(), nullable=False),
        sa.Column('user_id', GUID(), nullable=True),
        sa.Column('user_name', sa.String(length=255), nullable=True),
        sa.Column('user_email', sa.String(length=255), nullable=False),
        sa.Column('action', sa.String(length=50), nullable=False),
        sa.Column('resource_type', sa.String(length=50), nullable=False),
        sa.Column('resource_id', sa.String(length=64), nullable=True),
        sa.Column('details', JSON(), nullable=True),
        sa.Column('ip_address', sa.String(length=45), nullable=True),
        sa.Column('user_agent', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    for column in ('company_id', 'user_id', 'resource_type', 'resource_id', 'created_at'):
        op.create_index(op.f(f'ix_user_logs_{column}'), 'user_logs', [column], unique=False)

    op.create_table(
        'notifications',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('company_id', GUID(), nullable=False),
        sa.Column('user_id', GUID(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('type', sa.String(length=30), nullable=False),
        sa.Column('read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('data', JSON(), nullable=True),
        sa.Column('created_by', GUID(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    for column in ('company_id', 'user_id', 'read', 'created_at'):
        op.create_index(op.f(f'ix_notifications_{column}'), 'notifications', [column], unique=False)


def downgrade() -> None:
    op.drop_table('notifications')
    op.drop_table('user_logs')
    op.drop_table('job_templates')
    with op.batch_alter_table('interviews') as batch_op:
        batch_op.drop_index(op.f('ix_interviews_interview_process_id'))
        batch_op.drop_constraint('fk_interviews_interview_process_id', type_='foreignkey')
        batch_op.drop_column('interview_process_id')
    op.drop_table('interview_processes')
