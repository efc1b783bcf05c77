"""
Vehicle model.
Database model for the dealership catalog.
"""

import uuid

from sqlalchemy import Boolean, Column, DateTime, Integer, JSON, Numeric, String, Text, Uuid, false
from sqlalchemy.sql import func

from app.core.database import Base
from app.models.base import utcnow


VEHICLE_TYPES = ("Car", "Bike", "SUV", "Truck", "Van")
MIN_YEAR = 1900
MAX_YEAR = 2030
MAX_IMAGES = 5
DESCRIPTION_PLACEHOLDER = "Vehicle description will be generated."


class Vehicle(Base):
    """Vehicle model - one catalog entry"""
    __tablename__ = "vehicles"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    type = Column(String(50), nullable=False, index=True)  # Car, Bike, SUV, Truck, Van
    brand = Column(String(100), nullable=False, index=True)
    model = Column(String(100), nullable=False)
    color = Column(String(50), nullable=False)
    engine_size = Column(String(50), nullable=False)  # e.g. 2.5L, 689cc, Electric
    year = Column(Integer, nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    description = Column(Text, nullable=False)
    images = Column(JSON, nullable=False, default=list)  # CloudFront URLs, max 5
    is_featured = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<Vehicle(id={self.id}, brand='{self.brand}', model='{self.model}', year={self.year}, price={self.price})>"
