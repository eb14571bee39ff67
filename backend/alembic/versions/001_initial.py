"""Initial migration: blueprints and contracts

Revision ID: 001_initial
Revises: 
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'blueprints',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('fields_json', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )

    op.create_table(
        'contracts',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        # No foreign key: blueprint deletion does not cascade to contracts
        sa.Column('blueprint_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column(
            'status',
            sa.Enum('CREATED', 'APPROVED', 'SENT', 'SIGNED', 'LOCKED', 'REVOKED', name='contractstatus'),
            nullable=False,
        ),
        sa.Column('data_json', sa.JSON(), nullable=False),
        sa.Column('history_json', sa.JSON(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_contracts_blueprint_id', 'contracts', ['blueprint_id'])
    op.create_index('ix_contracts_created_at', 'contracts', ['created_at'])


def downgrade() -> None:
    op.drop_index('ix_contracts_created_at', table_name='contracts')
    op.drop_index('ix_contracts_blueprint_id', table_name='contracts')
    op.drop_table('contracts')
    op.drop_table('blueprints')
