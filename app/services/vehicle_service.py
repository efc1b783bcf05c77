"""
Vehicle service.

Coordinates the vehicle repository with image storage and description
generation. Storage cleanup and creation-time description generation are
best effort; explicit regeneration is not.
"""

import logging
import uuid
from typing import List

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import DescriptionGenerationError
from app.models.vehicle import DESCRIPTION_PLACEHOLDER, Vehicle
from app.schemas.vehicle import VehicleCreate, VehicleUpdate
from app.services.description_generator import DescriptionGenerator, get_description_generator
from app.services.storage_service import StorageService, get_storage_service
from app.services.vehicle_repository import VehicleRepository

logger = logging.getLogger(__name__)


def _to_columns(data: dict) -> dict:
    if "featured" in data:
        data["is_featured"] = data.pop("featured")
    return data


class VehicleService:

    def __init__(self, db: Session, storage: StorageService, generator: DescriptionGenerator):
        self.db = db
        self.storage = storage
        self.generator = generator

    def get(self, vehicle_id: uuid.UUID) -> Vehicle:
        vehicle = VehicleRepository.get_by_id(self.db, vehicle_id)
        if not vehicle:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f'Vehicle with ID "{vehicle_id}" not found'
            )
        return vehicle

    def create(self, payload: VehicleCreate) -> Vehicle:
        """
        Save a new vehicle.

        When no description is supplied the vehicle is stored with a
        placeholder first, then a generated description replaces it. A
        generation failure keeps the placeholder.
        """
        data = _to_columns(payload.model_dump())
        provided = (data.get("description") or "").strip()
        data["description"] = provided or DESCRIPTION_PLACEHOLDER
        data["images"] = data.get("images") or []

        vehicle = VehicleRepository.create(self.db, data)

        if not provided:
            try:
                description = self.generator.generate(vehicle)
            except DescriptionGenerationError as e:
                logger.warning(f"Failed to generate AI description for vehicle {vehicle.id}: {str(e)}")
            else:
                vehicle = VehicleRepository.update(self.db, vehicle, {"description": description})

        logger.info(f"Created vehicle {vehicle.id} ({vehicle.brand} {vehicle.model})")
        return vehicle

    def update(self, vehicle_id: uuid.UUID, payload: VehicleUpdate) -> Vehicle:
        vehicle = self.get(vehicle_id)
        data = _to_columns(payload.model_dump(exclude_unset=True, exclude_none=True))
        return VehicleRepository.update(self.db, vehicle, data)

    def remove(self, vehicle_id: uuid.UUID) -> None:
        """Delete a vehicle; its images are removed from storage on a best-effort basis"""
        vehicle = self.get(vehicle_id)

        if vehicle.images:
            self.storage.delete_images(list(vehicle.images))

        VehicleRepository.delete(self.db, vehicle)
        logger.info(f"Deleted vehicle {vehicle_id}")

    def bulk_remove(self, vehicle_ids: List[uuid.UUID]) -> int:
        """
        Delete several vehicles and their images.

        Returns:
            Number of vehicle rows deleted (unknown IDs are not counted)
        """
        if not vehicle_ids:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No vehicle IDs provided"
            )

        vehicles = VehicleRepository.get_by_ids(self.db, vehicle_ids)

        image_urls = [url for vehicle in vehicles for url in (vehicle.images or [])]
        if image_urls:
            self.storage.delete_images(image_urls)

        deleted = VehicleRepository.delete_by_ids(self.db, [vehicle.id for vehicle in vehicles])
        logger.info(f"Bulk deleted {deleted} vehicles")
        return deleted

    def generate_description(self, vehicle_id: uuid.UUID) -> str:
        """
        Regenerate and persist the description of an existing vehicle.

        Raises:
            HTTPException 404: If the vehicle does not exist
            HTTPException 502: If the text generation provider fails
        """
        vehicle = self.get(vehicle_id)

        try:
            description = self.generator.generate(vehicle)
        except DescriptionGenerationError as e:
            logger.error(f"Description generation failed for vehicle {vehicle_id}: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Failed to generate vehicle description"
            )

        VehicleRepository.update(self.db, vehicle, {"description": description})
        return description


def get_vehicle_service(
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage_service),
    generator: DescriptionGenerator = Depends(get_description_generator),
) -> VehicleService:
    return VehicleService(db, storage, generator)
