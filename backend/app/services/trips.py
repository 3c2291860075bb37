"""
Trip store operations

Every operation is scoped to an explicit owner id; a trip that exists but
belongs to someone else is reported as not found.
"""

from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from app.core.errors import TripNotFoundError, TripStoreError
from app.core.logging import get_logger
from app.models.trip import Trip
from app.services.validation import (
    check_update_date_order,
    validate_trip_create,
    validate_trip_update,
)

logger = get_logger(__name__)


def _owner_filter(trip_id: str, owner_id: str) -> dict:
    if not ObjectId.is_valid(trip_id):
        raise TripNotFoundError(trip_id)
    return {"_id": ObjectId(trip_id), "userId": owner_id}


def _now() -> datetime:
    return datetime.now(timezone.utc)


async def list_trips(collection, owner_id: str) -> list[Trip]:
    """All trips of the owner, newest first."""
    try:
        cursor = collection.find({"userId": owner_id}).sort("createdAt", DESCENDING)
        docs = await cursor.to_list(length=None)
    except PyMongoError as e:
        raise TripStoreError(f"Failed to list trips: {e}") from e
    return [Trip.model_validate(doc) for doc in docs]


async def get_trip(collection, owner_id: str, trip_id: str) -> Trip:
    query = _owner_filter(trip_id, owner_id)
    try:
        doc = await collection.find_one(query)
    except PyMongoError as e:
        raise TripStoreError(f"Failed to load trip: {e}") from e
    if not doc:
        raise TripNotFoundError(trip_id)
    return Trip.model_validate(doc)


async def create_trip(collection, owner_id: str, payload: Any) -> Trip:
    """
    Validate and insert a new trip.
    Nothing is written when validation fails.
    """
    trip = validate_trip_create(payload)

    now = _now()
    doc = trip.model_dump(by_alias=True)
    doc.update({"userId": owner_id, "createdAt": now, "updatedAt": now})

    try:
        result = await collection.insert_one(doc)
    except PyMongoError as e:
        raise TripStoreError(f"Failed to create trip: {e}") from e

    doc["_id"] = result.inserted_id
    logger.info("trip_created", trip_id=str(result.inserted_id), owner_id=owner_id)
    return Trip.model_validate(doc)


async def update_trip(collection, owner_id: str, trip_id: str, payload: Any) -> Trip:
    """
    Apply a partial update.

    Supplied top-level fields are $set as-is, so nested objects (budget,
    accommodation, transportation, activities) are replaced wholesale rather
    than deep-merged.
    """
    changes = validate_trip_update(payload)
    query = _owner_filter(trip_id, owner_id)

    try:
        existing = await collection.find_one(query)
        if not existing:
            raise TripNotFoundError(trip_id)

        check_update_date_order(changes, existing)

        changes["updatedAt"] = _now()
        updated = await collection.find_one_and_update(
            query, {"$set": changes}, return_document=ReturnDocument.AFTER
        )
    except PyMongoError as e:
        raise TripStoreError(f"Failed to update trip: {e}") from e

    # Removed between the read and the write
    if not updated:
        raise TripNotFoundError(trip_id)

    logger.info(
        "trip_updated",
        trip_id=trip_id,
        owner_id=owner_id,
        fields=sorted(k for k in changes if k != "updatedAt"),
    )
    return Trip.model_validate(updated)


async def delete_trip(collection, owner_id: str, trip_id: str) -> dict:
    """Hard delete; there is no tombstone."""
    query = _owner_filter(trip_id, owner_id)
    try:
        result = await collection.delete_one(query)
    except PyMongoError as e:
        raise TripStoreError(f"Failed to delete trip: {e}") from e

    if result.deleted_count == 0:
        raise TripNotFoundError(trip_id)

    logger.info("trip_deleted", trip_id=trip_id, owner_id=owner_id)
    return {"message": "Trip deleted successfully"}
