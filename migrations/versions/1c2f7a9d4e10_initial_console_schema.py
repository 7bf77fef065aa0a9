"""initial_console_schema

Revision ID: 1c2f7a9d4e10
Revises:
Create Date: 2026-10-18 09:12:31.402115

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '1c2f7a9d4e10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    """Create category, identity, vendor and sales tables."""
    op.create_table(
        'head_categories',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('image_url', sa.Text()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_head_categories_slug', 'head_categories', ['slug'], unique=True)

    op.create_table(
        'sub_categories',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('head_category_id', sa.Uuid(), sa.ForeignKey('head_categories.id'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('image_url', sa.Text()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_sub_categories_slug', 'sub_categories', ['slug'], unique=True)
    op.create_index('ix_sub_categories_head_category_id', 'sub_categories', ['head_category_id'])

    op.create_table(
        'micro_categories',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('sub_category_id', sa.Uuid(), sa.ForeignKey('sub_categories.id'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('image_url', sa.Text()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_micro_categories_slug', 'micro_categories', ['slug'], unique=True)
    op.create_index('ix_micro_categories_sub_category_id', 'micro_categories', ['sub_category_id'])

    # Not mapped by the ORM; older databases name the link column micro_categories
    op.create_table(
        'micro_category_meta',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('micro_category_id', sa.Uuid(), sa.ForeignKey('micro_categories.id'), nullable=False),
        sa.Column('meta_title', sa.String()),
        sa.Column('meta_description', sa.Text()),
        sa.Column('meta_keywords', sa.Text()),
        *_timestamps(),
    )
    op.create_index('ix_micro_category_meta_micro_category_id', 'micro_category_meta', ['micro_category_id'])

    op.create_table(
        'auth_users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(50), nullable=False),
        sa.Column('full_name', sa.String(255)),
        sa.Column('user_metadata', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_auth_users_email', 'auth_users', ['email'], unique=True)

    op.create_table(
        'auth_sessions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('auth_users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('token_hash', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True)),
    )
    op.create_index('ix_auth_sessions_token_hash', 'auth_sessions', ['token_hash'], unique=True)
    op.create_index('ix_auth_sessions_user_id', 'auth_sessions', ['user_id'])

    op.create_table(
        'employees',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid()),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255)),
        sa.Column('role', sa.String(50), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_employees_user_id', 'employees', ['user_id'])
    op.create_index('ix_employees_email', 'employees', ['email'])

    op.create_table(
        'states',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
    )
    op.create_table(
        'cities',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('state_id', sa.Uuid(), sa.ForeignKey('states.id'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
    )
    op.create_index('ix_cities_state_id', 'cities', ['state_id'])

    op.create_table(
        'vendors',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('vendor_id', sa.String(32), nullable=False),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('auth_users.id'), nullable=False, unique=True),
        sa.Column('company_name', sa.String(), nullable=False),
        sa.Column('owner_name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('phone', sa.String(10), nullable=False),
        sa.Column('address', sa.Text()),
        sa.Column('gst_number', sa.String(15)),
        sa.Column('state_id', sa.Uuid(), sa.ForeignKey('states.id')),
        sa.Column('city_id', sa.Uuid(), sa.ForeignKey('cities.id')),
        sa.Column('state_name', sa.String()),
        sa.Column('city_name', sa.String()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_vendors_vendor_id', 'vendors', ['vendor_id'], unique=True)

    op.create_table(
        'leads',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String()),
        sa.Column('email', sa.String()),
        sa.Column('phone', sa.String()),
        sa.Column('requirement', sa.Text()),
        sa.Column('status', sa.String(50), nullable=False, server_default='NEW'),
        *_timestamps(),
    )
    op.create_index('ix_leads_status', 'leads', ['status'])
    op.create_index('ix_leads_created_at', 'leads', ['created_at'])

    op.create_table(
        'lead_purchases',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('lead_id', sa.Uuid(), sa.ForeignKey('leads.id')),
        sa.Column('vendor_id', sa.Uuid(), sa.ForeignKey('vendors.id')),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('purchase_date', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_lead_purchases_lead_id', 'lead_purchases', ['lead_id'])
    op.create_index('ix_lead_purchases_purchase_date', 'lead_purchases', ['purchase_date'])

    op.create_table(
        'vendor_plans',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('price', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('duration_days', sa.Integer()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    """Drop every console table, children first."""
    for table_name in [
        'vendor_plans',
        'lead_purchases',
        'leads',
        'vendors',
        'cities',
        'states',
        'employees',
        'auth_sessions',
        'auth_users',
        'micro_category_meta',
        'micro_categories',
        'sub_categories',
        'head_categories',
    ]:
        op.drop_table(table_name)
