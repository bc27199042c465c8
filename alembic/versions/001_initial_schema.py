"""Initial schema: observed bridge events and submitted transactions.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Bridge events table
    op.create_table(
        'bridge_events',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('event_name', sa.String(32), nullable=False),
        sa.Column('block_number', sa.BigInteger(), nullable=False),
        sa.Column('transaction_hash', sa.String(66), nullable=False),
        sa.Column('log_index', sa.Integer(), nullable=False),
        sa.Column('user', sa.String(42), nullable=True),
        sa.Column('amount', sa.String(78), nullable=True),
        sa.Column('token', sa.String(42), nullable=True),
        sa.Column('chain', sa.String(66), nullable=True),
        sa.Column('bridge_tx_id', sa.String(66), nullable=True),
        sa.Column('message_id', sa.String(66), nullable=True),
        sa.Column('message_type', sa.String(64), nullable=True),
        sa.Column('observed_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_bridge_events_tx_log', 'bridge_events', ['transaction_hash', 'log_index'], unique=True)
    op.create_index('ix_bridge_events_event_name', 'bridge_events', ['event_name'])
    op.create_index('ix_bridge_events_block_number', 'bridge_events', ['block_number'])
    op.create_index('ix_bridge_events_user', 'bridge_events', ['user'])
    op.create_index('ix_bridge_events_bridge_tx_id', 'bridge_events', ['bridge_tx_id'])

    # Submitted transactions table
    op.create_table(
        'submitted_transactions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('operation', sa.String(64), nullable=False),
        sa.Column('transaction_hash', sa.String(66), nullable=True),
        sa.Column('sender', sa.String(42), nullable=True),
        sa.Column('parameters', sa.Text(), nullable=True),
        sa.Column('value_wei', sa.String(78), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('transaction_hash')
    )
    op.create_index('ix_submitted_transactions_operation', 'submitted_transactions', ['operation'])


def downgrade() -> None:
    op.drop_table('submitted_transactions')
    op.drop_table('bridge_events')
