"""
Import all models to ensure they are registered with SQLAlchemy.
"""
from ..base import Base
from .user import User
from .connection import ConnectionRequest, ConnectionStatus
from .block import Block
from .message import Message
from .room import Room, RoomMember, RoomMessage
