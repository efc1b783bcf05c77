"""
Pydantic schemas for Vehicle.
Request and response models for the vehicle API endpoints.

Field names are exposed in camelCase on the wire (engineSize, createdAt, ...).
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from app.models.vehicle import MAX_IMAGES, MAX_YEAR, MIN_YEAR


VehicleType = Literal["Car", "Bike", "SUV", "Truck", "Van"]
SortField = Literal["price", "year", "createdAt", "brand", "model"]
SortOrder = Literal["ASC", "DESC", "asc", "desc"]


# ============================================================================
# Vehicle Schemas
# ============================================================================

class VehicleBase(BaseModel):
    """Base schema for Vehicle"""
    type: VehicleType = Field(..., description="Type of vehicle", examples=["Car"])
    brand: str = Field(..., min_length=1, max_length=100, description="Vehicle brand", examples=["Toyota"])
    model: str = Field(..., min_length=1, max_length=100, description="Vehicle model name", examples=["Camry"])
    color: str = Field(..., min_length=1, max_length=50, description="Vehicle color", examples=["Blue"])
    engine_size: str = Field(..., alias="engineSize", min_length=1, max_length=50, description="Engine size specification", examples=["2.5L"])
    year: int = Field(..., ge=MIN_YEAR, le=MAX_YEAR, description="Manufacturing year")
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, description="Vehicle price in USD")


class VehicleCreate(VehicleBase):
    """Schema for creating a vehicle; description is generated when omitted"""
    description: Optional[str] = Field(None, description="Vehicle description (optional - can be AI generated)")
    images: List[str] = Field(default_factory=list, max_length=MAX_IMAGES, description="Array of image URLs")
    featured: bool = Field(False, description="Show this vehicle ahead of other results")

    class Config:
        populate_by_name = True
        extra = "forbid"


class VehicleUpdate(BaseModel):
    """Schema for partially updating a vehicle"""
    type: Optional[VehicleType] = None
    brand: Optional[str] = Field(None, min_length=1, max_length=100)
    model: Optional[str] = Field(None, min_length=1, max_length=100)
    color: Optional[str] = Field(None, min_length=1, max_length=50)
    engine_size: Optional[str] = Field(None, alias="engineSize", min_length=1, max_length=50)
    year: Optional[int] = Field(None, ge=MIN_YEAR, le=MAX_YEAR)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    description: Optional[str] = Field(None, min_length=1)
    images: Optional[List[str]] = Field(None, max_length=MAX_IMAGES)
    featured: Optional[bool] = None

    class Config:
        populate_by_name = True
        extra = "forbid"


class VehicleResponse(BaseModel):
    """Schema for vehicle response"""
    id: uuid.UUID
    type: str
    brand: str
    model: str
    color: str
    engine_size: str = Field(..., alias="engineSize")
    year: int
    price: float
    description: str
    images: List[str]
    is_featured: bool = Field(False, alias="featured")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class VehicleBulkDelete(BaseModel):
    """Schema for bulk deleting vehicles"""
    ids: List[uuid.UUID] = Field(..., description="IDs of the vehicles to delete")


class VehicleBulkDeleteResponse(BaseModel):
    deleted: int


class DescriptionResponse(BaseModel):
    description: str


# ============================================================================
# Query and Filter Schemas
# ============================================================================

class VehicleFilter(BaseModel):
    """Schema for filtering, sorting and paginating vehicles"""
    type: Optional[str] = Field(None, description="Exact vehicle type")
    brand: Optional[str] = Field(None, description="Brand (partial match)")
    model: Optional[str] = Field(None, description="Model (partial match)")
    color: Optional[str] = Field(None, description="Color (partial match)")
    engine_size: Optional[str] = Field(None, description="Engine size (partial match)")
    year: Optional[int] = Field(None, description="Exact manufacturing year")
    min_price: Optional[Decimal] = Field(None, ge=0)
    max_price: Optional[Decimal] = Field(None, ge=0)
    search: Optional[str] = Field(None, description="Search across brand, model and description")
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)
    sort_by: SortField = "createdAt"
    sort_order: SortOrder = "DESC"


class VehicleListResponse(BaseModel):
    """Schema for paginated list of vehicles"""
    data: List[VehicleResponse]
    total: int
    page: int
    limit: int
    total_pages: int = Field(..., alias="totalPages")

    class Config:
        populate_by_name = True


# ============================================================================
# Statistics Schemas
# ============================================================================

class VehicleTypeCount(BaseModel):
    type: str
    count: int


class VehicleStats(BaseModel):
    """Schema for inventory statistics"""
    total_vehicles: int = Field(..., alias="totalVehicles")
    vehicle_types: List[VehicleTypeCount] = Field(..., alias="vehicleTypes")
    average_price: float = Field(..., alias="averagePrice")
    total_value: float = Field(..., alias="totalValue")
    recently_added: int = Field(..., alias="recentlyAdded")

    class Config:
        populate_by_name = True
