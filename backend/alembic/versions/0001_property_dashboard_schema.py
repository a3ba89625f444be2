"""Create property dashboard tables

Revision ID: 0001_property_dashboard
Revises:
Create Date: 2025-01-15 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_property_dashboard'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('properties',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('apartment_number', sa.Integer(), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('rooms', sa.Integer(), nullable=False),
        sa.Column('readiness_status', sa.Enum('FURNISHED', 'UNFURNISHED', name='readinessstatus'), nullable=False),
        sa.Column('urgent_matter', sa.Text(), nullable=True),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('hidden', sa.Boolean(), nullable=False),
        sa.Column('custom_fields', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_properties_id'), 'properties', ['id'], unique=False)

    op.create_table('tenants',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('apartment_id', sa.Integer(), nullable=False),
        sa.Column('entry_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('exit_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', sa.Enum('current', 'past', 'future', 'upcoming', name='tenantstatus'), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('receive_payment_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('utility_payment_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('internet_payment_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_paid', sa.Boolean(), nullable=False),
        sa.Column('payment_attachment', sa.String(length=500), nullable=True),
        sa.Column('hidden', sa.Boolean(), nullable=False),
        sa.Column('custom_fields', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.ForeignKeyConstraint(['apartment_id'], ['properties.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_tenants_id'), 'tenants', ['id'], unique=False)
    op.create_index(op.f('ix_tenants_apartment_id'), 'tenants', ['apartment_id'], unique=False)

    op.create_table('custom_field_definitions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('field_id', sa.String(length=50), nullable=False),
        sa.Column('header', sa.String(length=100), nullable=False),
        sa.Column('type', sa.Enum('text', 'number', 'date', 'select', 'boolean', name='customfieldtype'), nullable=False),
        sa.Column('entity_type', sa.Enum('PROPERTY', 'TENANT', name='entitytype'), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('field_id')
    )
    op.create_index(op.f('ix_custom_field_definitions_id'), 'custom_field_definitions', ['id'], unique=False)
    op.create_index('idx_custom_field_entity_order', 'custom_field_definitions', ['entity_type', 'order'], unique=False)

    op.create_table('updates',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('author', sa.String(length=255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_updates_id'), 'updates', ['id'], unique=False)
    op.create_index(op.f('ix_updates_date'), 'updates', ['date'], unique=False)


def downgrade():
    op.drop_index(op.f('ix_updates_date'), table_name='updates')
    op.drop_index(op.f('ix_updates_id'), table_name='updates')
    op.drop_table('updates')
    op.drop_index('idx_custom_field_entity_order', table_name='custom_field_definitions')
    op.drop_index(op.f('ix_custom_field_definitions_id'), table_name='custom_field_definitions')
    op.drop_table('custom_field_definitions')
    op.drop_index(op.f('ix_tenants_apartment_id'), table_name='tenants')
    op.drop_index(op.f('ix_tenants_id'), table_name='tenants')
    op.drop_table('tenants')
    op.drop_index(op.f('ix_properties_id'), table_name='properties')
    op.drop_table('properties')
