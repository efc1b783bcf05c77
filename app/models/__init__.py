"""
Database models for the application.
"""

from app.core.database import Base
from app.models.admin import Admin
from app.models.vehicle import Vehicle

__all__ = [
    "Base",
    "Admin",
    "Vehicle",
]
