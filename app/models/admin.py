"""
Admin model for database operations.
"""

import uuid

from sqlalchemy import Column, String, DateTime, Uuid
from sqlalchemy.sql import func

from app.core.database import Base
from app.models.base import utcnow


class Admin(Base):
    """
    Admin table model.

    Table: admins
    Stores the credentials of users allowed to manage the catalog.
    """
    __tablename__ = "admins"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)  # bcrypt hash
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Admin(id={self.id}, username='{self.username}')>"
