"""initial_schema

Revision ID: d1e2f3a4b5c6
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = 'd1e2f3a4b5c6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ASSET_TYPES = ('LAPTOP', 'MONITOR', 'DESKTOP')
ASSET_STATUSES = ('SPARE', 'DEPLOYED', 'LEND', 'MISSING', 'DEFECTIVE', 'DISPOSE')


def _timestamps(updated_nullable: bool = True) -> list:
    return [
        sa.Column('date_created', sa.DateTime(timezone=True), nullable=False),
        sa.Column('date_updated', sa.DateTime(timezone=True), nullable=updated_nullable),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=32), nullable=False),
        sa.Column('firstname', sa.String(length=128), nullable=False),
        sa.Column('lastname', sa.String(length=128), nullable=False),
        sa.Column('reference_id', sa.String(length=64), nullable=False),
        sa.Column('profile_picture', sa.String(length=500), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_reference_id'), 'users', ['reference_id'], unique=True)

    op.create_table(
        'activity_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('reference_id', sa.String(length=64), nullable=True),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('device_id', sa.String(length=128), nullable=True),
        sa.Column('ip_address', sa.String(length=64), nullable=True),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_activity_logs_id'), 'activity_logs', ['id'], unique=False)
    op.create_index(op.f('ix_activity_logs_user_id'), 'activity_logs', ['user_id'], unique=False)
    op.create_index(op.f('ix_activity_logs_reference_id'), 'activity_logs', ['reference_id'], unique=False)

    op.create_table(
        'preferences',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('key', sa.String(length=128), nullable=False),
        sa.Column('value', sa.JSON(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'key', name='uq_preferences_user_key'),
    )
    op.create_index(op.f('ix_preferences_id'), 'preferences', ['id'], unique=False)
    op.create_index(op.f('ix_preferences_user_id'), 'preferences', ['user_id'], unique=False)

    op.create_table(
        'inventory',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('referenceid', sa.String(length=64), nullable=False),
        sa.Column('asset_tag', sa.String(length=32), nullable=True),
        sa.Column('asset_type', sa.Enum(*ASSET_TYPES, name='assettype'), nullable=True),
        sa.Column('status', sa.Enum(*ASSET_STATUSES, name='assetstatus'), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('new_user', sa.String(length=255), nullable=True),
        sa.Column('old_user', sa.String(length=255), nullable=True),
        sa.Column('department', sa.String(length=255), nullable=True),
        sa.Column('position', sa.String(length=255), nullable=True),
        sa.Column('brand', sa.String(length=128), nullable=True),
        sa.Column('model', sa.String(length=128), nullable=True),
        sa.Column('processor', sa.String(length=128), nullable=True),
        sa.Column('ram', sa.String(length=64), nullable=True),
        sa.Column('storage', sa.String(length=64), nullable=True),
        sa.Column('serial_number', sa.String(length=128), nullable=True),
        sa.Column('mac_address', sa.String(length=64), nullable=True),
        sa.Column('purchase_date', sa.Date(), nullable=True),
        sa.Column('warranty_date', sa.Date(), nullable=True),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('remarks', sa.String(length=2000), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_inventory_id'), 'inventory', ['id'], unique=False)
    op.create_index(op.f('ix_inventory_referenceid'), 'inventory', ['referenceid'], unique=False)
    op.create_index(op.f('ix_inventory_asset_tag'), 'inventory', ['asset_tag'], unique=True)

    op.create_table(
        'licenses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('referenceid', sa.String(length=64), nullable=False),
        sa.Column('software_name', sa.String(length=255), nullable=True),
        sa.Column('software_version', sa.String(length=64), nullable=True),
        sa.Column('total_purchased', sa.Integer(), nullable=True),
        sa.Column('managed_installation', sa.Integer(), nullable=True),
        sa.Column('remaining', sa.Integer(), nullable=True),
        sa.Column('compliance_status', sa.String(length=64), nullable=True),
        sa.Column('action', sa.String(length=255), nullable=True),
        sa.Column('purchase_date', sa.Date(), nullable=True),
        sa.Column('remarks', sa.String(length=2000), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_licenses_id'), 'licenses', ['id'], unique=False)
    op.create_index(op.f('ix_licenses_referenceid'), 'licenses', ['referenceid'], unique=False)

    op.create_table(
        'assigned_assets',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('assigned_number', sa.String(length=32), nullable=False),
        sa.Column('referenceid', sa.String(length=64), nullable=False),
        sa.Column('inventory_id', sa.Integer(), nullable=True),
        sa.Column('asset_tag', sa.String(length=32), nullable=True),
        sa.Column('asset_type', sa.String(length=32), nullable=True),
        sa.Column('brand', sa.String(length=128), nullable=True),
        sa.Column('model', sa.String(length=128), nullable=True),
        sa.Column('serial_number', sa.String(length=128), nullable=True),
        sa.Column('remarks', sa.String(length=2000), nullable=True),
        sa.Column('new_user', sa.String(length=255), nullable=False),
        sa.Column('old_user', sa.String(length=255), nullable=True),
        sa.Column('position', sa.String(length=255), nullable=False),
        sa.Column('department', sa.String(length=255), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('date_created', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['inventory_id'], ['inventory.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_assigned_assets_id'), 'assigned_assets', ['id'], unique=False)
    op.create_index(op.f('ix_assigned_assets_assigned_number'), 'assigned_assets', ['assigned_number'], unique=False)
    op.create_index(op.f('ix_assigned_assets_referenceid'), 'assigned_assets', ['referenceid'], unique=False)
    op.create_index(op.f('ix_assigned_assets_inventory_id'), 'assigned_assets', ['inventory_id'], unique=False)

    op.create_table(
        'accounts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('referenceid', sa.String(length=64), nullable=False),
        sa.Column('tsm', sa.String(length=64), nullable=True),
        sa.Column('manager', sa.String(length=64), nullable=True),
        sa.Column('account_reference_number', sa.String(length=64), nullable=False),
        sa.Column('company_name', sa.String(length=255), nullable=False),
        sa.Column('contact_person', sa.String(length=255), nullable=True),
        sa.Column('contact_number', sa.String(length=64), nullable=True),
        sa.Column('email_address', sa.String(length=255), nullable=True),
        sa.Column('address', sa.String(length=500), nullable=True),
        sa.Column('region', sa.String(length=64), nullable=True),
        sa.Column('type_client', sa.String(length=64), nullable=True),
        sa.Column('next_available_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('remarks', sa.String(length=2000), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_accounts_id'), 'accounts', ['id'], unique=False)
    op.create_index(op.f('ix_accounts_referenceid'), 'accounts', ['referenceid'], unique=False)
    op.create_index(op.f('ix_accounts_account_reference_number'), 'accounts', ['account_reference_number'], unique=True)
    op.create_index(op.f('ix_accounts_type_client'), 'accounts', ['type_client'], unique=False)

    op.create_table(
        'activities',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('referenceid', sa.String(length=64), nullable=False),
        sa.Column('tsm', sa.String(length=64), nullable=False),
        sa.Column('manager', sa.String(length=64), nullable=False),
        sa.Column('account_reference_number', sa.String(length=64), nullable=False),
        sa.Column('activity_reference_number', sa.String(length=64), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False),
        *_timestamps(updated_nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_activities_id'), 'activities', ['id'], unique=False)
    op.create_index(op.f('ix_activities_referenceid'), 'activities', ['referenceid'], unique=False)
    op.create_index(op.f('ix_activities_account_reference_number'), 'activities', ['account_reference_number'], unique=False)
    op.create_index(op.f('ix_activities_activity_reference_number'), 'activities', ['activity_reference_number'], unique=True)

    op.create_table(
        'history',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('activity_reference_number', sa.String(length=64), nullable=False),
        sa.Column('account_reference_number', sa.String(length=64), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('type_activity', sa.String(length=64), nullable=False),
        sa.Column('referenceid', sa.String(length=64), nullable=True),
        sa.Column('tsm', sa.String(length=64), nullable=True),
        sa.Column('manager', sa.String(length=64), nullable=True),
        sa.Column('target_quota', sa.String(length=64), nullable=True),
        sa.Column('type_client', sa.String(length=64), nullable=True),
        sa.Column('source', sa.String(length=128), nullable=True),
        sa.Column('callback', sa.DateTime(timezone=True), nullable=True),
        sa.Column('call_status', sa.String(length=64), nullable=True),
        sa.Column('call_type', sa.String(length=64), nullable=True),
        sa.Column('product_category', sa.String(length=128), nullable=True),
        sa.Column('project_type', sa.String(length=128), nullable=True),
        sa.Column('project_name', sa.String(length=255), nullable=True),
        sa.Column('quotation_number', sa.String(length=64), nullable=True),
        sa.Column('quotation_amount', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('so_number', sa.String(length=64), nullable=True),
        sa.Column('so_amount', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('dr_number', sa.String(length=64), nullable=True),
        sa.Column('actual_sales', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('payment_terms', sa.String(length=128), nullable=True),
        sa.Column('delivery_date', sa.Date(), nullable=True),
        sa.Column('date_followup', sa.Date(), nullable=True),
        sa.Column('scheduled_status', sa.String(length=32), nullable=True),
        sa.Column('remarks', sa.String(length=2000), nullable=True),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(updated_nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_history_id'), 'history', ['id'], unique=False)
    op.create_index(op.f('ix_history_activity_reference_number'), 'history', ['activity_reference_number'], unique=False)
    op.create_index(op.f('ix_history_account_reference_number'), 'history', ['account_reference_number'], unique=False)
    op.create_index(op.f('ix_history_referenceid'), 'history', ['referenceid'], unique=False)

    op.create_table(
        'meetings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('referenceid', sa.String(length=64), nullable=False),
        sa.Column('tsm', sa.String(length=64), nullable=True),
        sa.Column('manager', sa.String(length=64), nullable=True),
        sa.Column('type_activity', sa.String(length=128), nullable=False),
        sa.Column('remarks', sa.String(length=2000), nullable=True),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('date_created', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_meetings_id'), 'meetings', ['id'], unique=False)
    op.create_index(op.f('ix_meetings_referenceid'), 'meetings', ['referenceid'], unique=False)

    op.create_table(
        'endorsed_tickets',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('account_reference_number', sa.String(length=64), nullable=False),
        sa.Column('company_name', sa.String(length=255), nullable=False),
        sa.Column('contact_person', sa.String(length=255), nullable=False),
        sa.Column('contact_number', sa.String(length=64), nullable=False),
        sa.Column('email_address', sa.String(length=255), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=False),
        sa.Column('ticket_reference_number', sa.String(length=64), nullable=False),
        sa.Column('wrap_up', sa.String(length=255), nullable=False),
        sa.Column('inquiry', sa.String(length=2000), nullable=False),
        sa.Column('manager', sa.String(length=64), nullable=False),
        sa.Column('agent', sa.String(length=64), nullable=False),
        *_timestamps(updated_nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_endorsed_tickets_id'), 'endorsed_tickets', ['id'], unique=False)
    op.create_index(op.f('ix_endorsed_tickets_account_reference_number'), 'endorsed_tickets', ['account_reference_number'], unique=False)
    op.create_index(op.f('ix_endorsed_tickets_ticket_reference_number'), 'endorsed_tickets', ['ticket_reference_number'], unique=False)
    op.create_index(op.f('ix_endorsed_tickets_agent'), 'endorsed_tickets', ['agent'], unique=False)


def downgrade() -> None:
    for table in (
        'endorsed_tickets', 'meetings', 'history', 'activities', 'accounts',
        'assigned_assets', 'licenses', 'inventory', 'preferences', 'activity_logs', 'users',
    ):
        op.drop_table(table)
    # Drop the enum types (needed for PostgreSQL, no-op for SQLite)
    sa.Enum(name='assetstatus').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='assettype').drop(op.get_bind(), checkfirst=True)
