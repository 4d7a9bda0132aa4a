"""
Pydantic schemas for the application.
"""
from studybridge.schemas import auth
from studybridge.schemas import user
from studybridge.schemas import connection
from studybridge.schemas import message
from studybridge.schemas import room

__all__ = ["auth", "user", "connection", "message", "room"]
