"""
API routers for the application.
"""

from fastapi import APIRouter, Depends

from app.core.rate_limit import global_rate_limiter
from app.routers import auth, vehicles, storage

api_router = APIRouter(dependencies=[Depends(global_rate_limiter)])

# Include routers
api_router.include_router(auth.router)
api_router.include_router(vehicles.router)
api_router.include_router(storage.router)  # S3 image upload/delete

__all__ = ["api_router", "auth", "vehicles", "storage"]
