"""Add chat rooms, room membership and room messages

Revision ID: chat_rooms
Revises: initial_schema
Create Date: 2025-02-17

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
revision = 'chat_rooms'
down_revision = 'initial_schema'
branch_labels = None
depends_on = None


def upgrade():
    if not table_exists('rooms'):
        op.create_table(
            'rooms',
            sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
            sa.Column('name', sa.String(length=255), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('created_by', sa.Uuid(as_uuid=True), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.ForeignKeyConstraint(['created_by'], ['users.id'], name='fk_rooms_created_by_users', ondelete='SET NULL'),
            sa.PrimaryKeyConstraint('id', name='pk_rooms'),
            sa.UniqueConstraint('name', name='uq_rooms_name'),
        )
    create_index_if_not_exists('ix_rooms_created_by', 'rooms', ['created_by'])

    if not table_exists('room_members'):
        op.create_table(
            'room_members',
            sa.Column('room_id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Uuid(as_uuid=True), nullable=False),
            sa.Column('joined_at', sa.DateTime(timezone=True), nullable=False),
            sa.ForeignKeyConstraint(['room_id'], ['rooms.id'], name='fk_room_members_room_id_rooms', ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_room_members_user_id_users', ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('room_id', 'user_id', name='pk_room_members'),
        )
    create_index_if_not_exists('ix_room_members_user_id', 'room_members', ['user_id'])

    if not table_exists('room_messages'):
        op.create_table(
            'room_messages',
            sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
            sa.Column('room_id', sa.Integer(), nullable=False),
            sa.Column('sender_id', sa.Uuid(as_uuid=True), nullable=False),
            sa.Column('content', sa.Text(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.ForeignKeyConstraint(['room_id'], ['rooms.id'], name='fk_room_messages_room_id_rooms', ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['sender_id'], ['users.id'], name='fk_room_messages_sender_id_users', ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id', name='pk_room_messages'),
        )
    create_index_if_not_exists('ix_room_messages_room_id', 'room_messages', ['room_id'])
    create_index_if_not_exists('ix_room_messages_sender_id', 'room_messages', ['sender_id'])


def downgrade():
    drop_table_if_exists('room_messages')
    drop_table_if_exists('room_members')
    drop_table_if_exists('rooms')
