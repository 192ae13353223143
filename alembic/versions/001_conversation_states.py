"""Conversation state table

Revision ID: 001_conversation_states
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the conversation_states table: one row per conversation
holding the serialized user profile and dialog position.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = '001_conversation_states'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'conversation_states',
        sa.Column('conversation_id', sa.String(256), nullable=False),
        sa.Column('state', postgresql.JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column('current_step', sa.String(32), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('conversation_id'),
    )
    op.create_index('ix_conversation_states_current_step', 'conversation_states', ['current_step'])


def downgrade() -> None:
    op.drop_index('ix_conversation_states_current_step', table_name='conversation_states')
    op.drop_table('conversation_states')
