"""
API Router for Vehicle endpoints.
Catalog browsing is public; every mutation requires an admin token.
"""

import uuid
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.core.auth import get_current_admin
from app.core.database import get_db
from app.core.rate_limit import description_rate_limiter
from app.models.admin import Admin
from app.schemas.vehicle import (
    DescriptionResponse,
    SortField,
    SortOrder,
    VehicleBulkDelete,
    VehicleBulkDeleteResponse,
    VehicleCreate,
    VehicleFilter,
    VehicleListResponse,
    VehicleResponse,
    VehicleStats,
    VehicleUpdate,
)
from app.services.vehicle_repository import VehicleRepository, total_pages
from app.services.vehicle_service import VehicleService, get_vehicle_service

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


# ============================================================================
# READ ENDPOINTS (public)
# ============================================================================

@router.get("", response_model=VehicleListResponse)
def get_all_vehicles(
    db: Session = Depends(get_db),
    type: Optional[str] = Query(None, description="Filter by vehicle type (exact match)"),
    brand: Optional[str] = Query(None, description="Filter by brand (partial match)"),
    model: Optional[str] = Query(None, description="Filter by model (partial match)"),
    color: Optional[str] = Query(None, description="Filter by color (partial match)"),
    engine_size: Optional[str] = Query(None, alias="engineSize", description="Filter by engine size (partial match)"),
    year: Optional[int] = Query(None, description="Filter by manufacturing year"),
    min_price: Optional[Decimal] = Query(None, alias="minPrice", ge=0, description="Minimum price"),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", ge=0, description="Maximum price"),
    search: Optional[str] = Query(None, description="Search across brand, model and description"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
    sort_by: SortField = Query("createdAt", alias="sortBy", description="Sort field"),
    sort_order: SortOrder = Query("DESC", alias="sortOrder", description="Sort direction"),
):
    """
    Get vehicles with optional filtering, search, sorting and pagination.

    **Query Parameters:**
    - type: exact vehicle type (Car, Bike, SUV, Truck, Van)
    - brand, model, color, engineSize: case-insensitive partial match
    - year: exact year
    - minPrice / maxPrice: inclusive price range
    - search: matches brand, model or description
    - page (default 1), limit (default 10, max 100)
    - sortBy: price, year, createdAt, brand, model (default createdAt)
    - sortOrder: ASC or DESC (default DESC)

    Featured vehicles are always listed first.
    """
    if min_price is not None and max_price is not None and min_price > max_price:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="minPrice cannot be greater than maxPrice"
        )

    filters = VehicleFilter(
        type=type,
        brand=brand,
        model=model,
        color=color,
        engine_size=engine_size,
        year=year,
        min_price=min_price,
        max_price=max_price,
        search=search,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )

    vehicles, total = VehicleRepository.get_all(db, filters)

    return VehicleListResponse(
        data=[VehicleResponse.model_validate(v) for v in vehicles],
        total=total,
        page=page,
        limit=limit,
        total_pages=total_pages(total, limit)
    )


@router.get("/stats", response_model=VehicleStats)
def get_vehicle_stats(db: Session = Depends(get_db)):
    """Get inventory statistics: totals, count per type, average price, total value and recent additions."""
    return VehicleStats(**VehicleRepository.get_statistics(db))


@router.get("/{vehicle_id}", response_model=VehicleResponse)
def get_vehicle(vehicle_id: uuid.UUID, service: VehicleService = Depends(get_vehicle_service)):
    """Get a specific vehicle by ID."""
    return service.get(vehicle_id)


# ============================================================================
# ADMIN ENDPOINTS
# ============================================================================

@router.post("", response_model=VehicleResponse, status_code=status.HTTP_201_CREATED, tags=["admin"])
def create_vehicle(
    vehicle: VehicleCreate,
    service: VehicleService = Depends(get_vehicle_service),
    _: Admin = Depends(get_current_admin),
):
    """
    Create a new vehicle.

    If no description is given one is generated; if generation fails the
    vehicle is still saved with a placeholder description.
    """
    return service.create(vehicle)


@router.patch("/{vehicle_id}", response_model=VehicleResponse, tags=["admin"])
def update_vehicle(
    vehicle_id: uuid.UUID,
    vehicle_update: VehicleUpdate,
    service: VehicleService = Depends(get_vehicle_service),
    _: Admin = Depends(get_current_admin),
):
    """Partially update a vehicle. Only provided fields are changed."""
    return service.update(vehicle_id, vehicle_update)


@router.delete("/bulk/delete", response_model=VehicleBulkDeleteResponse, tags=["admin"])
def bulk_delete_vehicles(
    request: VehicleBulkDelete,
    service: VehicleService = Depends(get_vehicle_service),
    _: Admin = Depends(get_current_admin),
):
    """Delete several vehicles at once, together with their images."""
    deleted = service.bulk_remove(request.ids)
    return VehicleBulkDeleteResponse(deleted=deleted)


@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["admin"])
def delete_vehicle(
    vehicle_id: uuid.UUID,
    service: VehicleService = Depends(get_vehicle_service),
    _: Admin = Depends(get_current_admin),
):
    """
    Delete a vehicle.

    Image cleanup failures are logged and never block the deletion.
    """
    service.remove(vehicle_id)
    return None


@router.post(
    "/{vehicle_id}/generate-description",
    response_model=DescriptionResponse,
    tags=["admin"],
    dependencies=[Depends(description_rate_limiter)],
)
def generate_description(
    vehicle_id: uuid.UUID,
    service: VehicleService = Depends(get_vehicle_service),
    _: Admin = Depends(get_current_admin),
):
    """
    Generate and save a new AI description for a vehicle.

    Rate limited to 3 requests per minute.
    """
    return DescriptionResponse(description=service.generate_description(vehicle_id))
