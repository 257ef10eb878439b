"""
Homebase Backend: Shared Schema Pieces
======================================

What:  The camelCase base model, the numeric rounding type used by request
       bodies, and the error / health response models.
"""

import math
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes as camelCase, accepts camelCase or snake_case on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Bounds of the INTEGER columns; values outside them are a 400, not a driver error
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def reject_bool(value: Any) -> Any:
    """JSON true/false is not a number, although pydantic's lax mode would take it as 1/0."""
    if isinstance(value, bool):
        raise ValueError("must be a number, not a boolean")
    return value


def round_half_up(value: Any) -> Any:
    """
    Rounds numbers to the nearest integer with .5 going up (2.5 → 3, -2.5 → -2).

    Booleans are rejected. Anything else that is not a float is handed on
    untouched so the int validator can accept numeric strings or reject
    garbage with a 400.
    """
    value = reject_bool(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return value
        return math.floor(value + 0.5)
    return value


# Integer column fed from a JSON number that may carry a fraction.
# None stays None: "not provided" is never collapsed into 0.
RoundedInt = Annotated[
    int,
    BeforeValidator(round_half_up),
    Field(ge=INT32_MIN, le=INT32_MAX),
]

# Plain numbers that must not silently accept booleans.
WholeNumber = Annotated[int, BeforeValidator(reject_bool)]
DecimalNumber = Annotated[float, BeforeValidator(reject_bool)]


class ErrorResponse(BaseModel):
    """
    Standardized error body for every non-2xx response.

    Example:
        {
            "error": "not_found",
            "message": "Property with id 7 not found",
            "details": {"resource": "property", "resource_id": 7},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(CamelModel):
    """Returned by GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
