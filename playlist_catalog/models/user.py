"""User model.

Credentials are issued and checked outside this service; the catalog only
reads the role to decide whether a caller may mutate folders and playlists.
"""

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from ..database import Base

ROLE_VIEWER = "viewer"
ROLE_ADMIN = "admin"
ROLES = (ROLE_VIEWER, ROLE_ADMIN)


class User(Base):
    """Catalog user. Roles: viewer (read-only) or admin (full edit access)."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), unique=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    role = Column(String(20), nullable=False, default=ROLE_VIEWER)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
