"""
API Router for vehicle image storage (S3 / CloudFront).
"""

import logging
from typing import List, Optional
from urllib.parse import unquote

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from app.core.auth import get_current_admin
from app.core.exceptions import StorageError
from app.models.admin import Admin
from app.schemas.storage import UploadResponse
from app.services.storage_service import (
    MAX_FILES_PER_UPLOAD,
    ImageFile,
    StorageService,
    get_storage_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/aws", tags=["aws"])


@router.post("/upload/{vehicle_id}", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_vehicle_images(
    vehicle_id: str,
    images: Optional[List[UploadFile]] = File(None, description=f"Up to {MAX_FILES_PER_UPLOAD} images, 5MB each"),
    storage: StorageService = Depends(get_storage_service),
    _: Admin = Depends(get_current_admin),
):
    """
    Upload images for a vehicle.

    The whole batch is rejected when it has more than 5 files, or when any
    file is not a JPEG/PNG/WebP image or is larger than 5MB.
    """
    if not images:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No files provided"
        )

    files = [
        ImageFile(
            filename=upload.filename or "",
            content_type=upload.content_type or "",
            content=await upload.read(),
        )
        for upload in images
    ]

    try:
        image_urls = await run_in_threadpool(storage.upload_vehicle_images, files, vehicle_id)
    except StorageError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    logger.info(f"Uploaded {len(image_urls)} images for vehicle {vehicle_id}")
    return UploadResponse(image_urls=image_urls, uploaded_count=len(image_urls))


@router.delete("/image/{key:path}", status_code=status.HTTP_204_NO_CONTENT)
def delete_image(
    key: str,
    storage: StorageService = Depends(get_storage_service),
    _: Admin = Depends(get_current_admin),
):
    """Delete an image from S3. The key may be URL encoded."""
    try:
        storage.delete_image(unquote(key))
    except StorageError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )
    return None
