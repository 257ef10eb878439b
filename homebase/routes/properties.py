"""
Homebase Backend: Property Route Handlers
=========================================

What:  CRUD endpoints for the caller's properties.
Who:   Called by the frontend portfolio pages.

Every route requires a bearer token. Reads of another user's property answer
404; updates and deletes of it answer 403.
"""

from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from homebase.auth import CurrentUser
from homebase.database import get_db_session
from homebase.routes import parse_resource_id
from homebase.schemas.common import ErrorResponse
from homebase.schemas.property import PropertyCreate, PropertyResponse, PropertyUpdate
from homebase.services.property_service import property_service

router = APIRouter(prefix="/api/properties", tags=["Properties"])

_UNAUTHORIZED = {401: {"description": "Missing or invalid bearer token", "model": ErrorResponse}}
_BAD_REQUEST = {400: {"description": "Invalid id or body", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "Property not found", "model": ErrorResponse}}
_FORBIDDEN = {403: {"description": "Property belongs to another user", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[PropertyResponse],
    responses={**_UNAUTHORIZED},
    summary="List the caller's properties",
)
async def list_properties(
    user: CurrentUser,
    db: AsyncSession = Depends(get_db_session),
) -> List[PropertyResponse]:
    return await property_service.list_properties(db, user.user_id)


@router.get(
    "/{property_id}",
    response_model=PropertyResponse,
    responses={**_BAD_REQUEST, **_UNAUTHORIZED, **_NOT_FOUND},
    summary="Get one of the caller's properties",
)
async def get_property(
    property_id: str,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db_session),
) -> PropertyResponse:
    pid = parse_resource_id(property_id, "property")
    return await property_service.get_property(db, user.user_id, pid)


@router.post(
    "",
    status_code=201,
    response_model=PropertyResponse,
    responses={**_BAD_REQUEST, **_UNAUTHORIZED},
    summary="Add a property",
    description=(
        "Creates a property for the caller. formattedAddress is required. "
        "A street-view image URL is derived from the address when a Google Maps key is configured."
    ),
)
async def create_property(
    payload: PropertyCreate,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db_session),
) -> PropertyResponse:
    return await property_service.create_property(db, user.user_id, payload)


@router.put(
    "/{property_id}",
    response_model=PropertyResponse,
    responses={**_BAD_REQUEST, **_UNAUTHORIZED, **_FORBIDDEN, **_NOT_FOUND},
    summary="Replace a property's notes and financial details",
    description="Fields missing from the body are cleared.",
)
async def update_property(
    property_id: str,
    payload: PropertyUpdate,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db_session),
) -> PropertyResponse:
    pid = parse_resource_id(property_id, "property")
    return await property_service.update_property(db, user.user_id, pid, payload)


@router.delete(
    "/{property_id}",
    status_code=204,
    response_class=Response,
    responses={**_BAD_REQUEST, **_UNAUTHORIZED, **_FORBIDDEN, **_NOT_FOUND},
    summary="Delete a property",
)
async def delete_property(
    property_id: str,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    pid = parse_resource_id(property_id, "property")
    await property_service.delete_property(db, user.user_id, pid)
    return Response(status_code=204)
