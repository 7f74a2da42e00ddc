"""Admin model (persisted reviewer accounts)"""
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String

from eve_srp.database import Base


class Admin(Base):
    """A named reviewer account with a bcrypt password hash.

    The environment-configured superadmin (``SUPER_ADMIN_USERNAME`` /
    ``SUPER_ADMIN_PASSWORD``) is never stored here; it is represented in memory
    by ``EnvSuperAdmin`` with the reserved id 0.
    """

    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(32), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="admin")   # admin | super_admin
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
