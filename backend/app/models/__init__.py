"""
Models package for trip documents and API envelopes
"""

from app.models.common import APIResponse, MessageResponse, ValidationErrorDetail
from app.models.trip import (
    Accommodation,
    Activity,
    Budget,
    Transportation,
    Trip,
    TripCreate,
    TripUpdate,
)

__all__ = [
    "APIResponse",
    "MessageResponse",
    "ValidationErrorDetail",
    "Accommodation",
    "Activity",
    "Budget",
    "Transportation",
    "Trip",
    "TripCreate",
    "TripUpdate",
]
