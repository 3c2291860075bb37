"""
Trip Router
CRUD endpoints for the caller's trips
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from app.core.errors import TripNotFoundError, TripValidationError
from app.core.logging import get_logger
from app.core.security import get_current_owner_id
from app.db.database import get_trips_collection
from app.models.common import MessageResponse, ValidationErrorDetail
from app.models.trip import Trip
from app.services import trips as trip_service

logger = get_logger(__name__)

router = APIRouter(prefix="/trips", tags=["Trips"])


def get_collection():
    """
    Trips collection dependency
    """
    try:
        return get_trips_collection()
    except ValueError as e:
        logger.error("trips_collection_unavailable", error=str(e))
        raise HTTPException(status_code=500, detail="Database is not configured")


def _validation_failed(e: TripValidationError) -> HTTPException:
    logger.info("trip_validation_failed", errors=e.errors)
    detail = ValidationErrorDetail(message=e.message, errors=e.errors)
    return HTTPException(status_code=400, detail=detail.model_dump())


@router.get("", response_model=list[Trip])
async def list_trips(
    owner_id: str = Depends(get_current_owner_id),
    collection=Depends(get_collection),
):
    """
    Get all trips of the caller, newest first.
    """
    try:
        return await trip_service.list_trips(collection, owner_id)
    except Exception:
        logger.exception("trip_list_failed", owner_id=owner_id)
        raise HTTPException(status_code=500, detail="Error fetching trips")


@router.get("/{trip_id}", response_model=Trip)
async def get_trip(
    trip_id: str,
    owner_id: str = Depends(get_current_owner_id),
    collection=Depends(get_collection),
):
    try:
        return await trip_service.get_trip(collection, owner_id, trip_id)
    except TripNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception:
        logger.exception("trip_fetch_failed", trip_id=trip_id, owner_id=owner_id)
        raise HTTPException(status_code=500, detail="Error fetching trip")


@router.post("", status_code=201, response_model=Trip)
async def create_trip(
    payload: Any = Body(...),
    owner_id: str = Depends(get_current_owner_id),
    collection=Depends(get_collection),
):
    """
    Create a trip. Id, owner and timestamps are assigned here.
    """
    try:
        return await trip_service.create_trip(collection, owner_id, payload)
    except TripValidationError as e:
        raise _validation_failed(e)
    except Exception:
        logger.exception("trip_create_failed", owner_id=owner_id)
        raise HTTPException(status_code=500, detail="Error creating trip")


@router.put("/{trip_id}", response_model=Trip)
async def update_trip(
    trip_id: str,
    payload: Any = Body(...),
    owner_id: str = Depends(get_current_owner_id),
    collection=Depends(get_collection),
):
    """
    Partially update a trip. Nested objects sent in the body replace the
    stored ones entirely.
    """
    try:
        return await trip_service.update_trip(collection, owner_id, trip_id, payload)
    except TripValidationError as e:
        raise _validation_failed(e)
    except TripNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception:
        logger.exception("trip_update_failed", trip_id=trip_id, owner_id=owner_id)
        raise HTTPException(status_code=500, detail="Error updating trip")


@router.delete("/{trip_id}", response_model=MessageResponse)
async def delete_trip(
    trip_id: str,
    owner_id: str = Depends(get_current_owner_id),
    collection=Depends(get_collection),
):
    try:
        return await trip_service.delete_trip(collection, owner_id, trip_id)
    except TripNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception:
        logger.exception("trip_delete_failed", trip_id=trip_id, owner_id=owner_id)
        raise HTTPException(status_code=500, detail="Error deleting trip")
