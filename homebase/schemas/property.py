"""
Homebase Backend: Property Schemas
==================================

What:  Request bodies for creating / updating a property and the response model.

Presence vs value:
    Every input field is Optional so that a missing required field can be
    reported with a field-specific 400 by the service instead of a generic
    schema error. Numeric fields left out (or sent as null) stay None and are
    stored as NULL; an explicit 0 is stored as 0.
"""

from typing import Optional

from pydantic import Field

from homebase.schemas.common import CamelModel, DecimalNumber, RoundedInt


class PropertyCreate(CamelModel):
    """Body of POST /api/properties. Only formattedAddress is required."""
    formatted_address: Optional[str] = Field(default=None, description="Full street address")
    price: Optional[RoundedInt] = None
    price_range_low: Optional[RoundedInt] = None
    price_range_high: Optional[RoundedInt] = None
    property_type: Optional[str] = Field(default=None, description='Defaults to "Single Family"')
    bedrooms: Optional[DecimalNumber] = None
    bathrooms: Optional[DecimalNumber] = None
    square_footage: Optional[RoundedInt] = None
    year_built: Optional[RoundedInt] = None
    last_sale: Optional[str] = Field(default=None, description="Date of the last sale")
    last_sale_price: Optional[RoundedInt] = None


class PropertyUpdate(CamelModel):
    """
    Body of PUT /api/properties/{id}.

    Each field is replaced on every PUT: fields left out are written as null.
    """
    notes: Optional[str] = None
    monthly_rent: Optional[RoundedInt] = None
    mortgage_payment: Optional[RoundedInt] = None
    mortgage_balance: Optional[RoundedInt] = None
    hoa_payment: Optional[RoundedInt] = None
    interest_rate: Optional[DecimalNumber] = Field(default=None, description="Annual rate in percent, e.g. 6.25")


class PropertyResponse(CamelModel):
    """A full `properties` row."""
    id: int
    user_id: int
    formatted_address: str
    price: Optional[int] = None
    price_range_low: Optional[int] = None
    price_range_high: Optional[int] = None
    property_type: str
    bedrooms: Optional[float] = None
    bathrooms: Optional[float] = None
    square_footage: Optional[int] = None
    year_built: Optional[int] = None
    last_sale: Optional[str] = None
    last_sale_price: Optional[int] = None
    image: str
    notes: Optional[str] = None
    monthly_rent: Optional[int] = None
    mortgage_payment: Optional[int] = None
    mortgage_balance: Optional[int] = None
    hoa_payment: Optional[int] = None
    interest_rate: Optional[float] = None
