# Routes package init
"""
Homebase Backend: API Routes Package
====================================

Route Inventory:
    - properties.py:  GET/POST /api/properties, GET/PUT/DELETE /api/properties/{id}
    - movies.py:      GET/POST /api/movies,     GET/PUT/DELETE /api/movies/{id}
    - health.py:      GET /health

Routes stay thin: resolve the caller (CurrentUser), parse the path id, hand
the body to the service, pick the status code. Rules live in services.
"""

from homebase.exceptions import ValidationError
from homebase.schemas.common import INT32_MAX


def parse_resource_id(raw: str, resource: str) -> int:
    """
    Parses a path id into a positive integer that fits the INTEGER key columns.

    Only plain ASCII digits are accepted: no sign, underscores or other scripts.

    Raises:
        ValidationError: the id is not a whole number in 1..2147483647
    """
    text = raw.strip()
    value = int(text) if text.isascii() and text.isdigit() else 0
    if not 0 < value <= INT32_MAX:
        raise ValidationError(
            message=f"{resource} id must be a positive integer",
            field="id",
            context={"value": raw},
        )
    return value
