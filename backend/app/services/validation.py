"""
Trip payload validation

Turns raw JSON payloads into normalized trip data, or raises
TripValidationError with a field-path -> message map the UI can attach to
individual inputs.
"""

from typing import Any

from pydantic import ValidationError

from app.core.dates import normalize_date
from app.core.errors import TripValidationError
from app.models.trip import TRIP_STATUSES, TripCreate, TripUpdate

# Top-level fields that may be omitted from an update but never cleared by one
NON_NULLABLE_FIELDS = ("destination", "country", "startDate", "endDate", "budget", "status")

FIELD_LABELS: dict[str, str] = {
    "destination": "Destination",
    "country": "Country",
    "startDate": "Start date",
    "endDate": "End date",
    "budget": "Budget",
    "amount": "Budget amount",
    "currency": "Currency",
    "status": "Status",
    "name": "Name",
    "date": "Date",
    "location": "Location",
}


def _label(path: str) -> str:
    leaf = path.rsplit(".", 1)[-1]
    label = FIELD_LABELS.get(leaf, leaf)
    if path.startswith("activities."):
        return f"Activity {label.lower()}"
    return label


def _message(err: dict, path: str) -> str:
    kind = err.get("type")
    if kind in ("missing", "string_too_short"):
        return f"{_label(path)} is required"
    if kind == "value_error":
        ctx = err.get("ctx") or {}
        if "error" in ctx:
            return str(ctx["error"])
    if kind == "greater_than_equal":
        return f"{_label(path)} cannot be negative"
    if kind == "finite_number":
        return f"{_label(path)} must be a finite number"
    if kind in ("float_parsing", "float_type"):
        return f"{_label(path)} must be a number"
    if kind == "literal_error" and path == "status":
        return f"Status must be one of: {', '.join(TRIP_STATUSES)}"
    return err.get("msg", "Invalid value")


def field_errors(errors: list[dict], strip_prefix: str | None = None) -> dict[str, str]:
    """
    Flatten pydantic error dicts into {"budget.amount": "..."}.
    The first error reported for a path wins.
    """
    out: dict[str, str] = {}
    for err in errors:
        loc = list(err.get("loc", ()))
        if strip_prefix and loc and loc[0] == strip_prefix:
            loc = loc[1:]
        path = ".".join(str(part) for part in loc) or "body"
        out.setdefault(path, _message(err, path))
    return out


def _safe_date(value):
    try:
        return normalize_date(value)
    except ValueError:
        return None


def _ensure_object(payload: Any) -> dict:
    if not isinstance(payload, dict):
        raise TripValidationError({"body": "Trip payload must be a JSON object"})
    return payload


def _check_date_order(start, end, errors: dict[str, str]) -> None:
    if start is not None and end is not None and start > end and "endDate" not in errors:
        errors["endDate"] = "End date must be on or after the start date"


def validate_trip_create(payload: Any) -> TripCreate:
    """
    Validate a full trip payload. All problems are reported at once.
    """
    payload = _ensure_object(payload)
    errors: dict[str, str] = {}
    trip = None

    try:
        trip = TripCreate.model_validate(payload)
    except ValidationError as e:
        errors.update(field_errors(e.errors()))

    if trip is not None:
        _check_date_order(trip.start_date, trip.end_date, errors)
    else:
        _check_date_order(
            _safe_date(payload.get("startDate")), _safe_date(payload.get("endDate")), errors
        )

    if errors:
        raise TripValidationError(errors)
    return trip


def validate_trip_update(payload: Any) -> dict:
    """
    Validate only the fields present in a partial payload.

    Returns the camelCase fields to $set. Server-managed keys (_id, userId,
    timestamps) and unknown keys are dropped.
    """
    payload = _ensure_object(payload)
    errors: dict[str, str] = {}

    try:
        update = TripUpdate.model_validate(payload)
    except ValidationError as e:
        errors.update(field_errors(e.errors()))
        update = None

    changes: dict = {}
    if update is not None:
        # Nested values are dumped whole, so a supplied sub-object replaces the stored one
        dumped = update.model_dump(by_alias=True)
        for name in update.model_fields_set:
            key = TripUpdate.model_fields[name].alias or name
            changes[key] = dumped[key]
        for key in NON_NULLABLE_FIELDS:
            if key in changes and changes[key] is None:
                errors[key] = f"{_label(key)} is required"

    if "startDate" in changes and "endDate" in changes:
        _check_date_order(changes["startDate"], changes["endDate"], errors)

    if errors:
        raise TripValidationError(errors)
    return changes


def check_update_date_order(changes: dict, existing: dict) -> None:
    """
    Enforce endDate >= startDate on the record an update would produce.
    Only applies when the update touches one of the two dates.
    """
    if "startDate" not in changes and "endDate" not in changes:
        return
    start = changes.get("startDate", _safe_date(existing.get("startDate")))
    end = changes.get("endDate", _safe_date(existing.get("endDate")))
    errors: dict[str, str] = {}
    _check_date_order(start, end, errors)
    if errors:
        raise TripValidationError(errors)
