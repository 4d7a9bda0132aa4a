"""
CRUD operations for the application.
"""
from studybridge.crud import user
from studybridge.crud import connection
from studybridge.crud import block
from studybridge.crud import message
from studybridge.crud import room

__all__ = ["user", "connection", "block", "message", "room"]
