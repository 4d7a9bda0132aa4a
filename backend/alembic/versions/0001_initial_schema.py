"""Initial schema: users, connection requests, blocks and messages

Revision ID: initial_schema
Revises:
Create Date: 2025-02-03

"""
from alembic import op
import sqlalchemy as sa
import sys
from pathlib import Path

# Add alembic directory to path to import migration_helpers
alembic_dir = Path(__file__).resolve().parent.parent
if str(alembic_dir) not in sys.path:
    sys.path.insert(0, str(alembic_dir))

from migration_helpers import create_index_if_not_exists, drop_table_if_exists, table_exists


# revision identifiers, used by Alembic.
revision = 'initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    if not table_exists('users'):
        op.create_table(
            'users',
            sa.Column('id', sa.Uuid(as_uuid=True), nullable=False),
            sa.Column('name', sa.String(length=255), nullable=False),
            sa.Column('email', sa.String(length=255), nullable=False),
            sa.Column('phone', sa.String(length=32), nullable=True),
            sa.Column('password_hash', sa.String(length=255), nullable=False),
            sa.Column('city', sa.String(length=255), nullable=True),
            sa.Column('state', sa.String(length=255), nullable=True),
            sa.Column('country', sa.String(length=255), nullable=True),
            sa.Column('college', sa.String(length=255), nullable=True),
            sa.Column('bio', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.PrimaryKeyConstraint('id', name='pk_users'),
            sa.UniqueConstraint('phone', name='uq_users_phone'),
        )
    create_index_if_not_exists('ix_users_email', 'users', ['email'], unique=True)
    for column in ('city', 'state', 'country', 'college'):
        create_index_if_not_exists(f'ix_users_{column}', 'users', [column])

    if not table_exists('connection_requests'):
        # Rejected requests are deleted, so every row is active and the pair
        # constraint alone guarantees one active request per unordered pair
        op.create_table(
            'connection_requests',
            sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
            sa.Column('sender_id', sa.Uuid(as_uuid=True), nullable=False),
            sa.Column('receiver_id', sa.Uuid(as_uuid=True), nullable=False),
            sa.Column('pair_low', sa.Uuid(as_uuid=True), nullable=False),
            sa.Column('pair_high', sa.Uuid(as_uuid=True), nullable=False),
            sa.Column('status', sa.String(length=20), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.Column('responded_at', sa.DateTime(timezone=True), nullable=True),
            sa.ForeignKeyConstraint(['sender_id'], ['users.id'], name='fk_connection_requests_sender_id_users', ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['receiver_id'], ['users.id'], name='fk_connection_requests_receiver_id_users', ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id', name='pk_connection_requests'),
            sa.UniqueConstraint('pair_low', 'pair_high', name='uq_connection_requests_pair'),
        )
    create_index_if_not_exists('ix_connection_requests_sender_id', 'connection_requests', ['sender_id'])
    create_index_if_not_exists('ix_connection_requests_receiver_id', 'connection_requests', ['receiver_id'])
    create_index_if_not_exists('ix_connection_requests_status', 'connection_requests', ['status'])

    if not table_exists('blocks'):
        op.create_table(
            'blocks',
            sa.Column('blocker_id', sa.Uuid(as_uuid=True), nullable=False),
            sa.Column('blocked_id', sa.Uuid(as_uuid=True), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.ForeignKeyConstraint(['blocker_id'], ['users.id'], name='fk_blocks_blocker_id_users', ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['blocked_id'], ['users.id'], name='fk_blocks_blocked_id_users', ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('blocker_id', 'blocked_id', name='pk_blocks'),
        )
    create_index_if_not_exists('ix_blocks_blocked_id', 'blocks', ['blocked_id'])

    if not table_exists('messages'):
        op.create_table(
            'messages',
            sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
            sa.Column('sender_id', sa.Uuid(as_uuid=True), nullable=False),
            sa.Column('receiver_id', sa.Uuid(as_uuid=True), nullable=False),
            sa.Column('content', sa.Text(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.ForeignKeyConstraint(['sender_id'], ['users.id'], name='fk_messages_sender_id_users', ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['receiver_id'], ['users.id'], name='fk_messages_receiver_id_users', ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id', name='pk_messages'),
        )
    create_index_if_not_exists('ix_messages_sender_id', 'messages', ['sender_id'])
    create_index_if_not_exists('ix_messages_receiver_id', 'messages', ['receiver_id'])
    create_index_if_not_exists('ix_messages_conversation', 'messages', ['sender_id', 'receiver_id', 'created_at'])


def downgrade():
    drop_table_if_exists('messages')
    drop_table_if_exists('blocks')
    drop_table_if_exists('connection_requests')
    drop_table_if_exists('users')
