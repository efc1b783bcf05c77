"""
Image Storage Service.
Uploads vehicle images to S3 and deletes them again. Images are served
from the CloudFront distribution in front of the bucket.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional
from urllib.parse import unquote, urlparse

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import HTTPException, status

from app.core.config import settings
from app.core.exceptions import StorageError
from app.models.vehicle import MAX_IMAGES

logger = logging.getLogger(__name__)


ALLOWED_MIME_TYPES = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
}
MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB
MAX_FILES_PER_UPLOAD = MAX_IMAGES


@dataclass
class ImageFile:
    """An uploaded image held in memory"""
    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


class StorageService:
    """Wraps the S3 client used for vehicle images"""

    def __init__(
        self,
        bucket_name: Optional[str] = None,
        cloudfront_url: Optional[str] = None,
        client=None,
    ):
        self.bucket_name = bucket_name or settings.AWS_S3_BUCKET_NAME
        self.cloudfront_url = (cloudfront_url or settings.AWS_CLOUDFRONT_URL).rstrip("/")
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client(
                's3',
                region_name=settings.AWS_REGION,
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID or None,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or None,
                config=Config(retries={"total_max_attempts": 1}),
            )
        return self._client

    # ============================================================================
    # Validation
    # ============================================================================

    @staticmethod
    def validate_images(files: List[ImageFile]) -> None:
        """
        Validate a whole upload batch before anything is sent to S3.

        Raises:
            HTTPException 400: If there are too many files, or any file has
                a disallowed type or is larger than 5MB
        """
        if len(files) > MAX_FILES_PER_UPLOAD:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Maximum {MAX_FILES_PER_UPLOAD} files allowed per upload"
            )

        for file in files:
            if file.content_type not in ALLOWED_MIME_TYPES:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Invalid file type: {file.content_type}. "
                           f"Allowed types: {', '.join(ALLOWED_MIME_TYPES)}"
                )

            if file.size > MAX_FILE_SIZE:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"File too large: {file.size} bytes. Maximum size: {MAX_FILE_SIZE} bytes (5MB)"
                )

    # ============================================================================
    # Upload
    # ============================================================================

    def upload_vehicle_images(self, files: List[ImageFile], vehicle_id: str) -> List[str]:
        """
        Upload a batch of images for one vehicle.

        Files are uploaded in parallel and the call returns once all of
        them are stored.

        Returns:
            Public URLs in the same order as `files`

        Raises:
            HTTPException 400: If the batch fails validation (nothing is uploaded)
            StorageError: If any upload fails
        """
        self.validate_images(files)

        timestamp = int(time.time() * 1000)
        keys = [
            f"vehicles/{vehicle_id}/image-{timestamp}-{index}{ALLOWED_MIME_TYPES[file.content_type]}"
            for index, file in enumerate(files)
        ]

        # boto3 client creation is not thread-safe; build it before fanning out
        client = self.client
        with ThreadPoolExecutor(max_workers=max(len(files), 1)) as executor:
            futures = [
                executor.submit(self._upload_single_image, client, file, key)
                for file, key in zip(files, keys)
            ]
            try:
                return [future.result() for future in futures]
            except (BotoCoreError, ClientError) as e:
                logger.error(f"S3 upload failed for vehicle {vehicle_id}: {str(e)}")
                raise StorageError("Failed to upload images to S3") from e

    def _upload_single_image(self, client, file: ImageFile, key: str) -> str:
        client.put_object(
            Bucket=self.bucket_name,
            Key=key,
            Body=file.content,
            ContentType=file.content_type,
            Metadata={
                "originalName": file.filename or "",
                "uploadedAt": datetime.now(timezone.utc).isoformat(),
            },
        )
        return self.public_url(key)

    def public_url(self, key: str) -> str:
        return f"{self.cloudfront_url}/{key}"

    # ============================================================================
    # Delete
    # ============================================================================

    def delete_image(self, key: str, client=None) -> None:
        """
        Delete one object from the bucket.

        Raises:
            StorageError: If S3 rejects the deletion
        """
        client = client or self.client
        try:
            client.delete_object(Bucket=self.bucket_name, Key=key)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error deleting image {key}: {str(e)}")
            raise StorageError("Failed to delete image") from e

    @staticmethod
    def key_from_url(image_url: str) -> str:
        """Extract the object key from a CloudFront or S3 URL"""
        return unquote(urlparse(image_url).path.lstrip("/"))

    def delete_images(self, image_urls: List[str]) -> int:
        """
        Best-effort deletion of several images.

        Each failure is logged and does not stop the remaining deletions.

        Returns:
            Number of images deleted successfully
        """
        if not image_urls:
            return 0

        client = self.client

        def _delete(image_url: str) -> bool:
            try:
                key = self.key_from_url(image_url)
                if not key:
                    logger.warning(f"Skipping image with empty key: {image_url}")
                    return False
                self.delete_image(key, client)
                return True
            except Exception as e:
                logger.error(f"Failed to delete image from S3: {image_url} ({str(e)})")
                return False

        with ThreadPoolExecutor(max_workers=min(len(image_urls), 10)) as executor:
            results = list(executor.map(_delete, image_urls))

        deleted = sum(results)
        if deleted < len(image_urls):
            logger.warning(f"Deleted {deleted} of {len(image_urls)} images; the rest were left in storage")
        return deleted


storage_service = StorageService()


def get_storage_service() -> StorageService:
    """FastAPI dependency returning the shared storage service"""
    return storage_service
