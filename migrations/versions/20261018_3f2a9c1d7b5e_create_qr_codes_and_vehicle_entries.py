"""Create qr_codes and vehicle_entries

Revision ID: 20261018_3f2a9c1d7b5e
Revises: 
Create Date: 2026-10-18 09:12:40.518204

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '20261018_3f2a9c1d7b5e'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('qr_codes',
        sa.Column('id', sa.String(length=10), nullable=False),
        sa.Column('generated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('batch_id', sa.String(length=32), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_qr_codes_generated_at', 'qr_codes', ['generated_at'])
    op.create_index('ix_qr_codes_batch_id', 'qr_codes', ['batch_id'])

    op.create_table('vehicle_entries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('qr_code_id', sa.String(length=10), nullable=False),
        sa.Column('vehicle_number', sa.String(length=50), nullable=False, server_default=''),
        sa.Column('driver_name', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('mobile_number', sa.String(length=20), nullable=True),
        sa.Column('vehicle_type', sa.String(length=50), nullable=False, server_default=''),
        sa.Column('purpose', sa.String(length=200), nullable=False, server_default=''),
        sa.Column('status', sa.Enum('pending', 'allowed', 'denied', name='entry_status'),
                  nullable=False, server_default='allowed'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.ForeignKeyConstraint(['qr_code_id'], ['qr_codes.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_vehicle_entries_qr_code_id', 'vehicle_entries', ['qr_code_id'])
    op.create_index('ix_vehicle_entries_created_at', 'vehicle_entries', ['created_at'])
    op.create_index('ix_vehicle_entries_updated_at', 'vehicle_entries', ['updated_at'])


def downgrade():
    # Drop tables in reverse order
    op.drop_index('ix_vehicle_entries_updated_at', table_name='vehicle_entries')
    op.drop_index('ix_vehicle_entries_created_at', table_name='vehicle_entries')
    op.drop_index('ix_vehicle_entries_qr_code_id', table_name='vehicle_entries')
    op.drop_table('vehicle_entries')

    op.drop_index('ix_qr_codes_batch_id', table_name='qr_codes')
    op.drop_index('ix_qr_codes_generated_at', table_name='qr_codes')
    op.drop_table('qr_codes')
