"""
Homebase Backend: Property Service
==================================

What:  Business rules for properties on top of OwnedResourceService.
Who:   Called by the /api/properties route handlers.

Create flow:
    validate formattedAddress → derive street-view image → INSERT
    A missing Google Maps key is not an error: the property is stored with
    an empty image and a warning is logged.

Update flow:
    Only the owner-editable fields (notes + financials) are written, and all
    of them are written: anything not in the body becomes NULL.
"""

import logging
from typing import List, Optional
from urllib.parse import quote

from sqlalchemy.ext.asyncio import AsyncSession

from homebase.config import settings
from homebase.exceptions import ValidationError
from homebase.models.property import DEFAULT_PROPERTY_TYPE, Property
from homebase.schemas.property import PropertyCreate, PropertyResponse, PropertyUpdate
from homebase.services.owned_resource import OwnedResourceService

logger = logging.getLogger(__name__)

STREET_VIEW_URL = "https://maps.googleapis.com/maps/api/streetview"
STREET_VIEW_SIZE = "600x400"

# Characters JavaScript's encodeURIComponent leaves alone, besides alphanumerics and -_.
_URI_COMPONENT_SAFE = "!~*'()"

UPDATABLE_FIELDS = (
    "notes",
    "monthly_rent",
    "mortgage_payment",
    "mortgage_balance",
    "hoa_payment",
    "interest_rate",
)


def build_street_view_url(formatted_address: str, api_key: Optional[str]) -> str:
    """
    Street-view image URL for an address, or "" when no API key is configured.

    >>> build_street_view_url("1 Main St, Springfield", "k")
    'https://maps.googleapis.com/maps/api/streetview?size=600x400&location=1%20Main%20St%2C%20Springfield&key=k'
    """
    if not api_key:
        logger.warning("No Google Maps API key configured for property images")
        return ""
    location = quote(formatted_address, safe=_URI_COMPONENT_SAFE)
    return f"{STREET_VIEW_URL}?size={STREET_VIEW_SIZE}&location={location}&key={api_key}"


class PropertyService(OwnedResourceService[Property]):
    """
    Responsibilities:
        - list_properties(): caller's properties, id ascending
        - get_property(): one property, 404 unless owned by the caller
        - create_property(): validate, derive image, insert
        - update_property(): replace notes/financials, 403/404 on mismatch
        - delete_property(): remove, 403/404 on mismatch
    """

    model = Property
    resource = "property"

    def primary_key(self):
        return Property.id

    async def list_properties(self, db: AsyncSession, user_id: int) -> List[PropertyResponse]:
        rows = await self.list_owned(db, user_id)
        return [PropertyResponse.model_validate(row) for row in rows]

    async def get_property(self, db: AsyncSession, user_id: int, property_id: int) -> PropertyResponse:
        row = await self.get_owned(db, user_id, property_id)
        return PropertyResponse.model_validate(row)

    async def create_property(
        self,
        db: AsyncSession,
        user_id: int,
        payload: PropertyCreate,
    ) -> PropertyResponse:
        """
        Creates a property owned by `user_id`.

        Raises:
            ValidationError: formattedAddress missing or blank (nothing is written)
            DatabaseError:   the INSERT failed
        """
        address = (payload.formatted_address or "").strip()
        if not address:
            raise ValidationError(message="formattedAddress is required", field="formattedAddress")

        row = Property(
            user_id=user_id,
            formatted_address=address,
            price=payload.price,
            price_range_low=payload.price_range_low,
            price_range_high=payload.price_range_high,
            property_type=payload.property_type or DEFAULT_PROPERTY_TYPE,
            bedrooms=payload.bedrooms,
            bathrooms=payload.bathrooms,
            square_footage=payload.square_footage,
            year_built=payload.year_built,
            last_sale=payload.last_sale or None,
            last_sale_price=payload.last_sale_price,
            image=build_street_view_url(address, settings.google_maps_api_key),
        )
        row = await self.insert(db, row)
        return PropertyResponse.model_validate(row)

    async def update_property(
        self,
        db: AsyncSession,
        user_id: int,
        property_id: int,
        payload: PropertyUpdate,
    ) -> PropertyResponse:
        values = {field: getattr(payload, field) for field in UPDATABLE_FIELDS}
        # An empty note is stored as no note
        values["notes"] = values["notes"] or None
        row = await self.update_owned(db, user_id, property_id, values)
        return PropertyResponse.model_validate(row)

    async def delete_property(self, db: AsyncSession, user_id: int, property_id: int) -> None:
        await self.delete_owned(db, user_id, property_id)


property_service = PropertyService()
