"""Initial schema with all tables

Revision ID: 20261018_000001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '20261018_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    # === USERS ===
    op.create_table(
        'users',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('last_name', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('admin', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('language', sa.String(length=5), nullable=False, server_default='en'),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    # === SYSTEM SETTINGS ===
    op.create_table(
        'system_settings',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('key', sa.String(length=100), nullable=False),
        sa.Column('value', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_system_settings_key'), 'system_settings', ['key'], unique=True)

    # === INFO ===
    op.create_table(
        'info',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('on', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('timezone', sa.String(length=100), nullable=False, server_default='UTC'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    # === SITES ===
    op.create_table(
        'sites',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('handle', sa.String(length=100), nullable=False),
        sa.Column('language', sa.String(length=12), nullable=False, server_default='en'),
        sa.Column('primary', sa.Boolean(), nullable=False, server_default='false'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('handle'),
    )

    # === VOLUMES ===
    op.create_table(
        'volumes',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('handle', sa.String(length=100), nullable=False),
        sa.Column('settings', postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default='{}'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('handle'),
    )

    # === FIELDS ===
    op.create_table(
        'fields',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('handle', sa.String(length=64), nullable=False),
        sa.Column('instructions', sa.Text(), nullable=True),
        sa.Column('type', sa.String(length=100), nullable=False, server_default='plain_text'),
        sa.Column('translation_method', sa.String(length=20), nullable=False, server_default='none'),
        sa.Column('settings', postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default='{}'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_fields_handle'), 'fields', ['handle'], unique=True)

    op.create_table(
        'field_layouts',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('type', sa.String(length=100), nullable=False, server_default='global_set'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'field_layout_fields',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('layout_id', sa.UUID(), nullable=False),
        sa.Column('field_id', sa.UUID(), nullable=False),
        sa.Column('required', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['layout_id'], ['field_layouts.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['field_id'], ['fields.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_field_layout_fields_layout_id'), 'field_layout_fields', ['layout_id'])

    # === GLOBAL SETS ===
    op.create_table(
        'global_sets',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('handle', sa.String(length=64), nullable=False),
        sa.Column('field_layout_id', sa.UUID(), nullable=True),
        sa.Column('site_id', sa.UUID(), nullable=True),
        sa.Column('content', postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default='{}'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['field_layout_id'], ['field_layouts.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['site_id'], ['sites.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_global_sets_handle'), 'global_sets', ['handle'], unique=True)


def downgrade() -> None:
    op.drop_index(op.f('ix_global_sets_handle'), table_name='global_sets')
    op.drop_table('global_sets')
    op.drop_index(op.f('ix_field_layout_fields_layout_id'), table_name='field_layout_fields')
    op.drop_table('field_layout_fields')
    op.drop_table('field_layouts')
    op.drop_index(op.f('ix_fields_handle'), table_name='fields')
    op.drop_table('fields')
    op.drop_table('volumes')
    op.drop_table('sites')
    op.drop_table('info')
    op.drop_index(op.f('ix_system_settings_key'), table_name='system_settings')
    op.drop_table('system_settings')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
