"""
Repository layer for Vehicle operations.
Handles all database queries and operations for the vehicles table.
"""

import math
import uuid
from datetime import timedelta
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import or_, func
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status

from app.models.base import utcnow
from app.models.vehicle import Vehicle
from app.schemas.vehicle import VehicleFilter


SORT_COLUMNS = {
    "price": Vehicle.price,
    "year": Vehicle.year,
    "createdAt": Vehicle.created_at,
    "brand": Vehicle.brand,
    "model": Vehicle.model,
}

RECENT_DAYS = 30


def _contains(value: str) -> str:
    """LIKE pattern matching `value` literally anywhere in the column"""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


class VehicleRepository:
    """Repository for Vehicle operations"""

    @staticmethod
    def create(db: Session, data: dict) -> Vehicle:
        """Create a single vehicle"""
        try:
            db_vehicle = Vehicle(**data)
            db.add(db_vehicle)
            db.commit()
            db.refresh(db_vehicle)
            return db_vehicle
        except IntegrityError as e:
            db.rollback()
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Database integrity error: {str(e.orig)}"
            )

    @staticmethod
    def get_by_id(db: Session, vehicle_id: uuid.UUID) -> Optional[Vehicle]:
        """Get vehicle by ID"""
        return db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()

    @staticmethod
    def get_by_ids(db: Session, vehicle_ids: Iterable[uuid.UUID]) -> List[Vehicle]:
        return db.query(Vehicle).filter(Vehicle.id.in_(list(vehicle_ids))).all()

    @staticmethod
    def get_all(db: Session, filters: Optional[VehicleFilter] = None) -> Tuple[List[Vehicle], int]:
        """
        Get vehicles matching every supplied filter, sorted and paginated.

        Featured vehicles always come first. The requested sort is applied
        next, and creation recency breaks any remaining ties.

        Returns:
            (vehicles on the requested page, total matching vehicles)
        """
        filters = filters or VehicleFilter()
        query = db.query(Vehicle)

        if filters.type:
            query = query.filter(Vehicle.type == filters.type)

        if filters.brand:
            query = query.filter(Vehicle.brand.ilike(_contains(filters.brand), escape="\\"))

        if filters.model:
            query = query.filter(Vehicle.model.ilike(_contains(filters.model), escape="\\"))

        if filters.color:
            query = query.filter(Vehicle.color.ilike(_contains(filters.color), escape="\\"))

        if filters.engine_size:
            query = query.filter(Vehicle.engine_size.ilike(_contains(filters.engine_size), escape="\\"))

        if filters.year is not None:
            query = query.filter(Vehicle.year == filters.year)

        if filters.min_price is not None:
            query = query.filter(Vehicle.price >= filters.min_price)

        if filters.max_price is not None:
            query = query.filter(Vehicle.price <= filters.max_price)

        if filters.search:
            search_pattern = _contains(filters.search)
            query = query.filter(
                or_(
                    Vehicle.brand.ilike(search_pattern, escape="\\"),
                    Vehicle.model.ilike(search_pattern, escape="\\"),
                    Vehicle.description.ilike(search_pattern, escape="\\")
                )
            )

        # Get total count before pagination
        total = query.count()

        sort_column = SORT_COLUMNS[filters.sort_by]
        sort_clause = sort_column.asc() if filters.sort_order.upper() == "ASC" else sort_column.desc()

        query = query.order_by(
            Vehicle.is_featured.desc(),
            sort_clause,
            Vehicle.created_at.desc(),
            Vehicle.id,
        )

        skip = (filters.page - 1) * filters.limit
        vehicles = query.offset(skip).limit(filters.limit).all()

        return vehicles, total

    @staticmethod
    def update(db: Session, db_vehicle: Vehicle, data: dict) -> Vehicle:
        """Apply a partial update to a vehicle"""
        for field, value in data.items():
            setattr(db_vehicle, field, value)

        try:
            db.commit()
            db.refresh(db_vehicle)
            return db_vehicle
        except IntegrityError as e:
            db.rollback()
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Database integrity error: {str(e.orig)}"
            )

    @staticmethod
    def delete(db: Session, db_vehicle: Vehicle) -> None:
        db.delete(db_vehicle)
        db.commit()

    @staticmethod
    def delete_by_ids(db: Session, vehicle_ids: Iterable[uuid.UUID]) -> int:
        """Delete vehicles by ID and return how many rows were removed"""
        deleted = db.query(Vehicle).filter(
            Vehicle.id.in_(list(vehicle_ids))
        ).delete(synchronize_session=False)
        db.commit()
        return deleted

    # ============================================================================
    # STATISTICS
    # ============================================================================

    @staticmethod
    def get_statistics(db: Session) -> dict:
        """Get overall inventory statistics"""
        total_vehicles = db.query(func.count(Vehicle.id)).scalar()
        by_type = db.query(
            Vehicle.type,
            func.count(Vehicle.id).label('count')
        ).group_by(Vehicle.type).order_by(func.count(Vehicle.id).desc(), Vehicle.type).all()
        avg_price = db.query(func.avg(Vehicle.price)).scalar()
        total_value = db.query(func.sum(Vehicle.price)).scalar()
        recently_added = db.query(func.count(Vehicle.id)).filter(
            Vehicle.created_at >= utcnow() - timedelta(days=RECENT_DAYS)
        ).scalar()

        return {
            "total_vehicles": total_vehicles,
            "vehicle_types": [
                {"type": vehicle_type, "count": count}
                for vehicle_type, count in by_type
            ],
            "average_price": float(avg_price) if avg_price else 0.0,
            "total_value": float(total_value) if total_value else 0.0,
            "recently_added": recently_added
        }
