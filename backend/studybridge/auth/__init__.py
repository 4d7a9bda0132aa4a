# backend/studybridge/auth/__init__.py
from .dependencies import CurrentIdentity, Identity, get_current_identity

__all__ = ["CurrentIdentity", "Identity", "get_current_identity"]
