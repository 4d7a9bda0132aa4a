"""
Domain services: the rules that sit between the API routers and the CRUD
layer.
"""
from .accounts import AccountService
from .relationships import RelationshipService
from .messaging import MessagingService
from .rooms import RoomService

__all__ = ["AccountService", "RelationshipService", "MessagingService", "RoomService"]
