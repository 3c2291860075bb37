"""
Trip errors

The trip service raises these; routers translate them into HTTP responses.

Usage:
    from app.core.errors import TripNotFoundError

    raise TripNotFoundError(trip_id)
"""


class TripError(Exception):
    """Base exception for all trip errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class TripValidationError(TripError):
    """Payload failed validation. `errors` maps field paths to messages."""

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__("Validation error")


class TripNotFoundError(TripError):
    """No trip matches the id/owner combination."""

    def __init__(self, trip_id: str):
        self.trip_id = trip_id
        super().__init__("Trip not found")


class TripStoreError(TripError):
    """The document store failed in an unexpected way."""

    pass
