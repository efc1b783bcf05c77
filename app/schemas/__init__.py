"""
Schemas for the application.

This module exports all Pydantic models and schemas used for request/response validation.
"""

from app.schemas.auth import (
    AdminOut,
    AdminCreate,
    LoginRequest,
    LoginResponse,
)

from app.schemas.vehicle import (
    # Vehicle schemas
    VehicleCreate,
    VehicleUpdate,
    VehicleResponse,
    VehicleBulkDelete,
    VehicleBulkDeleteResponse,
    DescriptionResponse,
    # Query schemas
    VehicleFilter,
    VehicleListResponse,
    # Statistics schemas
    VehicleTypeCount,
    VehicleStats,
)

from app.schemas.storage import UploadResponse

__all__ = [
    # Auth schemas
    "AdminOut",
    "AdminCreate",
    "LoginRequest",
    "LoginResponse",

    # Vehicle schemas
    "VehicleCreate",
    "VehicleUpdate",
    "VehicleResponse",
    "VehicleBulkDelete",
    "VehicleBulkDeleteResponse",
    "DescriptionResponse",
    "VehicleFilter",
    "VehicleListResponse",
    "VehicleTypeCount",
    "VehicleStats",

    # Storage schemas
    "UploadResponse",
]
