"""
Trip model for personal itinerary planning
"""

from datetime import datetime
from typing import Literal

from bson import ObjectId
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from app.core.dates import normalize_date

TripStatus = Literal["planned", "ongoing", "completed", "cancelled"]

TRIP_STATUSES: tuple[str, ...] = ("planned", "ongoing", "completed", "cancelled")


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire and in MongoDB."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        str_strip_whitespace = True


class Budget(CamelModel):
    amount: float = Field(..., ge=0, allow_inf_nan=False, description="Planned spend, never negative")
    currency: str = Field(..., min_length=1, description="Currency code, e.g. USD")

    @field_validator("amount", mode="before")
    @classmethod
    def _reject_bool(cls, v):
        # bool is an int subclass; never an amount
        if isinstance(v, bool):
            raise ValueError("Budget amount must be a number")
        return v


class Activity(CamelModel):
    """A planned event; list position is display order."""

    name: str = Field(..., min_length=1)
    date: datetime
    location: str = Field(..., min_length=1)
    notes: str | None = None

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, v):
        normalized = normalize_date(v)
        if normalized is None:
            raise ValueError("Activity date is required")
        return normalized


class Accommodation(CamelModel):
    name: str | None = None
    address: str | None = None
    check_in: datetime | None = None
    check_out: datetime | None = None
    booking_reference: str | None = None

    @field_validator("check_in", "check_out", mode="before")
    @classmethod
    def _normalize_dates(cls, v):
        return normalize_date(v)


class Transportation(CamelModel):
    type: str | None = Field(None, description="flight, train, car, ...")
    booking_reference: str | None = None
    departure_time: datetime | None = None
    arrival_time: datetime | None = None
    notes: str | None = None

    @field_validator("departure_time", "arrival_time", mode="before")
    @classmethod
    def _normalize_dates(cls, v):
        return normalize_date(v)


class TripCreate(CamelModel):
    """
    Full payload accepted when a trip is created.
    Identity, owner and timestamps are assigned by the server.
    """

    destination: str = Field(..., min_length=1, description="City or region")
    country: str = Field(..., min_length=1)
    start_date: datetime
    end_date: datetime
    description: str = Field(default="")
    image: str | None = Field(None, description="URL to a cover image")
    budget: Budget
    activities: list[Activity] = Field(default_factory=list)
    accommodation: Accommodation | None = None
    transportation: Transportation | None = None
    status: TripStatus = "planned"

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _normalize_required_dates(cls, v, info):
        normalized = normalize_date(v)
        if normalized is None:
            label = "Start date" if info.field_name == "start_date" else "End date"
            raise ValueError(f"{label} is required")
        return normalized

    @field_validator("description", mode="before")
    @classmethod
    def _description_default(cls, v):
        return "" if v is None else v

    @field_validator("activities", mode="before")
    @classmethod
    def _activities_default(cls, v):
        return [] if v is None else v

    class Config:
        json_schema_extra = {
            "example": {
                "destination": "Paris",
                "country": "France",
                "startDate": "2024-06-15",
                "endDate": "2024-06-22",
                "description": "Summer in Paris",
                "budget": {"amount": 1000, "currency": "USD"},
                "activities": [
                    {"name": "Louvre", "date": "2024-06-16", "location": "Rue de Rivoli"}
                ],
                "status": "planned",
            }
        }


class TripUpdate(CamelModel):
    """
    Partial payload for updates. Only the fields actually sent are applied;
    nested objects replace the stored ones wholesale.
    """

    destination: str | None = Field(None, min_length=1)
    country: str | None = Field(None, min_length=1)
    start_date: datetime | None = None
    end_date: datetime | None = None
    description: str | None = None
    image: str | None = None
    budget: Budget | None = None
    activities: list[Activity] | None = None
    accommodation: Accommodation | None = None
    transportation: Transportation | None = None
    status: TripStatus | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _normalize_dates(cls, v):
        return normalize_date(v)

    @field_validator("description", mode="before")
    @classmethod
    def _description_default(cls, v):
        return "" if v is None else v

    @field_validator("activities", mode="before")
    @classmethod
    def _activities_default(cls, v):
        return [] if v is None else v


class Trip(CamelModel):
    """
    Stored trip document as returned by the API.
    Loose typing so older documents still serialize.
    """

    id: str = Field(..., alias="_id")
    user_id: str
    destination: str | None = None
    country: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    description: str = ""
    image: str | None = None
    budget: Budget | dict | None = None
    activities: list[Activity | dict] = Field(default_factory=list)
    accommodation: Accommodation | dict | None = None
    transportation: Transportation | dict | None = None
    status: str = "planned"

    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def _stringify_ids(cls, v):
        return str(v) if isinstance(v, ObjectId) else v

    @field_validator("description", mode="before")
    @classmethod
    def _description_default(cls, v):
        return "" if v is None else v

    @field_validator("activities", mode="before")
    @classmethod
    def _activities_default(cls, v):
        return [] if v is None else v
