"""
Helper utilities for creating idempotent Alembic migrations.

These helpers let a migration run against a database where some of its
objects already exist (for example one that was bootstrapped by hand),
without failing on "already exists" errors.

Usage Examples
--------------

1. Create a table only if it is missing:

    from migration_helpers import table_exists

    def upgrade():
        if not table_exists('rooms'):
            op.create_table('rooms', ...)

2. Create an index idempotently:

    from migration_helpers import create_index_if_not_exists

    def upgrade():
        create_index_if_not_exists(
            'ix_messages_conversation',
            'messages',
            ['sender_id', 'receiver_id', 'created_at'],
        )
"""

from alembic import op
import sqlalchemy as sa
from typing import List


def _inspector():
    return sa.inspect(op.get_bind())


def table_exists(table_name: str) -> bool:
    """
    Check if a table exists.

    Args:
        table_name: Name of the table to check

    Returns:
        True if the table exists, False otherwise
    """
    return _inspector().has_table(table_name)


def index_exists(table_name: str, index_name: str) -> bool:
    """
    Check if an index exists on a table.

    Args:
        table_name: Table the index belongs to
        index_name: Name of the index to check

    Returns:
        True if index exists, False otherwise
    """
    if not table_exists(table_name):
        return False
    return any(index["name"] == index_name for index in _inspector().get_indexes(table_name))


def create_index_if_not_exists(
    index_name: str,
    table_name: str,
    columns: List[str],
    unique: bool = False,
) -> bool:
    """
    Create an index only if it doesn't already exist.

    Returns:
        True if index was created, False if it already existed
    """
    if not index_exists(table_name, index_name):
        op.create_index(index_name, table_name, columns, unique=unique)
        return True
    return False


def drop_table_if_exists(table_name: str) -> bool:
    """
    Drop a table only if it exists.
    Useful for downgrade() functions.

    Returns:
        True if the table was dropped, False if it didn't exist
    """
    if table_exists(table_name):
        op.drop_table(table_name)
        return True
    return False
