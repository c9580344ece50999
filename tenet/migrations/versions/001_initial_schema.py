"""Initial schema: tenants, users, storages, applications, roles

Revision ID: 001_initial_schema
Revises:
Create Date: 2024-01-15

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Tenants table
    op.create_table(
        'tenants',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_tenants'),
    )

    # Users table
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('email_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('encryption_mode', sa.String(32), nullable=False, server_default='Argon2'),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('tenant_id', sa.Uuid(), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], name='fk_users_tenant_id_tenants'),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_index('ix_users_tenant_id', 'users', ['tenant_id'])
    op.create_index('ix_users_tenant_email', 'users', ['tenant_id', 'email'])

    # Storages table
    op.create_table(
        'storages',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tenant_id', sa.Uuid(), nullable=True),
        sa.Column('storage_type', sa.String(64), nullable=False),
        sa.Column('path', sa.Text(), nullable=True),
        sa.Column('connection_string', sa.Text(), nullable=True),
        sa.Column('schema', sa.Text(), nullable=True),
        sa.Column('table_prefix', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_storages'),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], name='fk_storages_tenant_id_tenants'),
    )
    op.create_index('ix_storages_tenant_id', 'storages', ['tenant_id'])

    # Applications table
    op.create_table(
        'applications',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('application_type', sa.String(64), nullable=False),
        sa.Column('storage_id', sa.Uuid(), nullable=True),
        sa.Column('tenant_id', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_applications'),
        sa.ForeignKeyConstraint(['storage_id'], ['storages.id'], name='fk_applications_storage_id_storages'),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], name='fk_applications_tenant_id_tenants'),
    )
    op.create_index('ix_applications_tenant_id', 'applications', ['tenant_id'])

    # Roles table
    op.create_table(
        'roles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('role_type', sa.String(64), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=True),
        sa.Column('application_id', sa.Uuid(), nullable=True),
        sa.Column('tenant_id', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_roles'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_roles_user_id_users'),
        sa.ForeignKeyConstraint(['application_id'], ['applications.id'], name='fk_roles_application_id_applications'),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], name='fk_roles_tenant_id_tenants'),
    )
    op.create_index('ix_roles_tenant_id', 'roles', ['tenant_id'])
    op.create_index('ix_roles_tenant_user', 'roles', ['tenant_id', 'user_id'])


def downgrade() -> None:
    op.drop_table('roles')
    op.drop_table('applications')
    op.drop_table('storages')
    op.drop_table('users')
    op.drop_table('tenants')
