"""
User model for authentication and profile data.
"""
from sqlalchemy import Column, String, Text

from ..base import Base, UUIDMixin, TimestampMixin


class User(Base, UUIDMixin, TimestampMixin):
    """
    A registered identity: credentials plus the optional profile attributes
    used by the user search.
    """
    __tablename__ = "users"

    # Authentication fields
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(32), unique=True, nullable=True)
    password_hash = Column(String(255), nullable=False)

    # Profile fields
    city = Column(String(255), index=True)
    state = Column(String(255), index=True)
    country = Column(String(255), index=True)
    college = Column(String(255), index=True)
    bio = Column(Text)

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"
