"""
Pydantic schemas for image storage endpoints.
"""

from typing import List

from pydantic import BaseModel, Field


class UploadResponse(BaseModel):
    """Response for a multi-image upload"""
    image_urls: List[str] = Field(..., alias="imageUrls", description="Public CloudFront URLs of the uploaded images")
    uploaded_count: int = Field(..., alias="uploadedCount")

    class Config:
        populate_by_name = True
