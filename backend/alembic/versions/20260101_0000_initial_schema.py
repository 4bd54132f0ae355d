"""initial_schema

Revision ID: 20260101_0000
Revises:
Create Date: 2026-01-01 00:00:00.000000+00:00

"""
from alembic import op
import sqlalchemy as sa

from careers.database_types import GUID, JSON


revision = '20260101_0000'
down_revision = None
branch_labels = None
depends_on = None

USER_ROLES = ('ADMIN', 'DIRECTOR', 'MANAGER', 'RECRUITER', 'USER')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'companies',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('logo', sa.String(length=500), nullable=True),
        sa.Column('website', sa.String(length=500), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('industry', sa.String(length=255), nullable=True),
        sa.Column('founded_year', sa.Integer(), nullable=True),
        sa.Column('size', sa.String(length=50), nullable=True),
        sa.Column('primary_color', sa.String(length=20), nullable=True),
        sa.Column('secondary_color', sa.String(length=20), nullable=True),
        sa.Column('slogan', sa.String(length=500), nullable=True),
        sa.Column('mission', sa.Text(), nullable=True),
        sa.Column('vision', sa.Text(), nullable=True),
        sa.Column('values', JSON(), nullable=True),
        sa.Column('social_links', JSON(), nullable=True),
        sa.Column('settings', JSON(), nullable=False),
        sa.Column('allowed_domains', JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'users',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('company_id', GUID(), nullable=False),
        sa.Column('role', sa.Enum(*USER_ROLES, name='user_role'), nullable=False),
        sa.Column('magic_link_token', sa.String(), nullable=True),
        sa.Column('magic_link_expires_at', sa.DateTime(), nullable=True),
        sa.Column('access_token', sa.String(), nullable=True),
        sa.Column('access_token_expires_at', sa.DateTime(), nullable=True),
        sa.Column('last_login_at', sa.DateTime(), nullable=True),
        sa.Column('last_login_ip', sa.String(length=45), nullable=True),
        sa.Column('failed_login_attempts', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('account_locked_until', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_company_id'), 'users', ['company_id'], unique=False)
    op.create_index(op.f('ix_users_role'), 'users', ['role'], unique=False)
    op.create_index(op.f('ix_users_magic_link_token'), 'users', ['magic_link_token'], unique=False)
    op.create_index(op.f('ix_users_access_token'), 'users', ['access_token'], unique=True)

    op.create_table(
        'offices',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('company_id', GUID(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=False),
        sa.Column('is_main', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_offices_company_id'), 'offices', ['company_id'], unique=False)

    op.create_table(
        'job_functions',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('company_id', GUID(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_job_functions_company_id'), 'job_functions', ['company_id'], unique=False)

    op.create_table(
        'job_roles',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('company_id', GUID(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('job_function_id', GUID(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['job_function_id'], ['job_functions.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_job_roles_company_id'), 'job_roles', ['company_id'], unique=False)
    op.create_index(op.f('ix_job_roles_job_function_id'), 'job_roles', ['job_function_id'], unique=False)

    op.create_table(
        'departments',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('company_id', GUID(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('parent_department_id', GUID(), nullable=True),
        sa.Column('approval_role', sa.String(length=50), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['parent_department_id'], ['departments.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_departments_company_id'), 'departments', ['company_id'], unique=False)
    op.create_index(
        op.f('ix_departments_parent_department_id'), 'departments', ['parent_department_id'], unique=False
    )

    op.create_table(
        'department_job_roles',
        sa.Column('department_id', GUID(), nullable=False),
        sa.Column('job_role_id', GUID(), nullable=False),
        sa.ForeignKeyConstraint(['department_id'], ['departments.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['job_role_id'], ['job_roles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('department_id', 'job_role_id')
    )

    op.create_table(
        'job_boards',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('company_id', GUID(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('custom_domain', sa.String(length=255), nullable=True),
        sa.Column('is_external', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('source', sa.String(length=20), nullable=False, server_default='custom'),
        sa.Column('external_id', sa.String(length=255), nullable=True),
        sa.Column('settings', JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('last_synced_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_job_boards_company_id'), 'job_boards', ['company_id'], unique=False)
    op.create_index(op.f('ix_job_boards_slug'), 'job_boards', ['slug'], unique=True)
    op.create_index(op.f('ix_job_boards_custom_domain'), 'job_boards', ['custom_domain'], unique=True)

    op.create_table(
        'headcount_requests',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('company_id', GUID(), nullable=False),
        sa.Column('role_title', sa.String(length=255), nullable=False),
        sa.Column('department_id', GUID(), nullable=True),
        sa.Column('team_name', sa.String(length=255), nullable=True),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('requested_by', GUID(), nullable=True),
        sa.Column('reviewed_by', GUID(), nullable=True),
        sa.Column('review_notes', sa.Text(), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['department_id'], ['departments.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['requested_by'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['reviewed_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_headcount_requests_company_id'), 'headcount_requests', ['company_id'], unique=False)
    op.create_index(
        op.f('ix_headcount_requests_department_id'), 'headcount_requests', ['department_id'], unique=False
    )
    op.create_index(op.f('ix_headcount_requests_status'), 'headcount_requests', ['status'], unique=False)
    op.create_index(
        op.f('ix_headcount_requests_requested_by'), 'headcount_requests', ['requested_by'], unique=False
    )

    op.create_table(
        'jobs',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('company_id', GUID(), nullable=False),
        sa.Column('internal_id', sa.String(length=100), nullable=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=30), nullable=False, server_default='draft'),
        sa.Column('job_board_id', GUID(), nullable=True),
        sa.Column('headcount_request_id', GUID(), nullable=True),
        sa.Column('external_id', sa.String(length=100), nullable=True),
        sa.Column('created_by', GUID(), nullable=True),
        sa.Column('approved_by', GUID(), nullable=True),
        sa.Column('approved_at', sa.DateTime(), nullable=True),
        sa.Column('rejected_by', GUID(), nullable=True),
        sa.Column('rejected_at', sa.DateTime(), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('published_date', sa.DateTime(), nullable=True),
        sa.Column('last_status_change_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['job_board_id'], ['job_boards.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['headcount_request_id'], ['headcount_requests.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['approved_by'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['rejected_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('headcount_request_id'),
        sa.UniqueConstraint('job_board_id', 'external_id', name='uq_job_board_external_id')
    )
    op.create_index(op.f('ix_jobs_company_id'), 'jobs', ['company_id'], unique=False)
    op.create_index(op.f('ix_jobs_status'), 'jobs', ['status'], unique=False)
    op.create_index(op.f('ix_jobs_job_board_id'), 'jobs', ['job_board_id'], unique=False)
    op.create_index(op.f('ix_jobs_external_id'), 'jobs', ['external_id'], unique=False)

    op.create_table(
        'job_departments',
        sa.Column('job_id', GUID(), nullable=False),
        sa.Column('department_id', GUID(), nullable=False),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['department_id'], ['departments.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('job_id', 'department_id')
    )
    op.create_table(
        'job_offices',
        sa.Column('job_id', GUID(), nullable=False),
        sa.Column('office_id', GUID(), nullable=False),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['office_id'], ['offices.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('job_id', 'office_id')
    )

    op.create_table(
        'company_api_keys',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('company_id', GUID(), nullable=False),
        sa.Column('key', sa.String(length=64), nullable=False),
        sa.Column('secret_hash', sa.String(length=128), nullable=False),
        sa.Column('secret_hint', sa.String(length=32), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('last_used_at', sa.DateTime(), nullable=True),
        sa.Column('created_by', GUID(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_company_api_keys_company_id'), 'company_api_keys', ['company_id'], unique=False)
    op.create_index(op.f('ix_company_api_keys_key'), 'company_api_keys', ['key'], unique=True)

    op.create_table(
        'job_applications',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('company_id', GUID(), nullable=False),
        sa.Column('job_id', GUID(), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('resume_url', sa.String(length=500), nullable=True),
        sa.Column('cover_letter', sa.Text(), nullable=True),
        sa.Column('source', sa.String(length=100), nullable=False, server_default='careers-site'),
        sa.Column('status', sa.String(length=30), nullable=False, server_default='applied'),
        sa.Column('is_referral', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('referred_by', GUID(), nullable=True),
        sa.Column('hired_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['referred_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    for column in ('company_id', 'job_id', 'email', 'source', 'status', 'referred_by', 'created_at'):
        op.create_index(op.f(f'ix_job_applications_{column}'), 'job_applications', [column], unique=False)

    op.create_table(
        'interviews',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('company_id', GUID(), nullable=False),
        sa.Column('application_id', GUID(), nullable=False),
        sa.Column('stage', sa.String(length=100), nullable=False),
        sa.Column('stage_order', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('interviewer_name', sa.String(length=255), nullable=False),
        sa.Column('interviewer_id', GUID(), nullable=True),
        sa.Column('scheduled_date', sa.DateTime(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('score', sa.Float(), nullable=True),
        sa.Column('outcome', sa.String(length=10), nullable=True),
        sa.Column('feedback_rating', sa.String(length=30), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['application_id'], ['job_applications.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['interviewer_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    for column in ('company_id', 'application_id', 'interviewer_id', 'scheduled_date'):
        op.create_index(op.f(f'ix_interviews_{column}'), 'interviews', [column], unique=False)


def downgrade() -> None:
    for table in (
        'interviews',
        'job_applications',
        'company_api_keys',
        'job_offices',
        'job_departments',
        'jobs',
        'headcount_requests',
        'job_boards',
        'department_job_roles',
        'departments',
        'job_roles',
        'job_functions',
        'offices',
        'users',
        'companies',
    ):
        op.drop_table(table)
    sa.Enum(name='user_role').drop(op.get_bind(), checkfirst=True)
