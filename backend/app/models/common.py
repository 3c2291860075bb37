"""
Common API models
"""

from typing import Any

from pydantic import BaseModel, Field


class APIResponse(BaseModel):
    """
    Envelope used by the system endpoints
    """

    code: int = Field(default=0, description="0 means success; non-zero means error")
    msg: str = Field(default="ok", description="Human-readable message")
    data: Any | None = Field(default=None, description="Payload data")

    class Config:
        json_schema_extra = {
            "example": {"code": 0, "msg": "ok", "data": {"status": "healthy"}}
        }


class MessageResponse(BaseModel):
    message: str = Field(..., description="Confirmation text")


class ValidationErrorDetail(BaseModel):
    """
    Body of a 400 response: field path -> message
    """

    message: str = Field(default="Validation error")
    errors: dict[str, str] = Field(default_factory=dict)

    class Config:
        json_schema_extra = {
            "example": {
                "message": "Validation error",
                "errors": {
                    "destination": "Destination is required",
                    "endDate": "End date must be on or after the start date",
                },
            }
        }
