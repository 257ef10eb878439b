"""
Homebase Backend: Property Model
================================

What:  ORM model for the `properties` table.
Who:   Used by PropertyService for every statement it issues.

Table Design:
    - id: integer primary key generated by the database
    - userId: owner; every query that reads or mutates a row filters on it
    - listing fields (price, bedrooms, ...) are written once on create
    - financial fields (monthlyRent, mortgage*, hoaPayment, interestRate)
      and notes are the only columns PUT may change
    - NULL means "not provided"; 0 is a real value

Index on userId:
    List and lookup queries are always scoped to one owner.
"""

from typing import Optional

from sqlalchemy import Float, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from homebase.database import Base

DEFAULT_PROPERTY_TYPE = "Single Family"


class Property(Base):
    """
    A property tracked by one user.

    Lifecycle:
        1. Created by POST with listing data and a derived street-view image
        2. Financial fields and notes replaced by PUT (any number of times)
        3. Hard-deleted by DELETE
    """

    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column("userId", Integer, nullable=False)

    # ── Listing data (set on create) ──────────────────────────────────────
    formatted_address: Mapped[str] = mapped_column("formattedAddress", Text, nullable=False)
    price: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    price_range_low: Mapped[Optional[int]] = mapped_column("priceRangeLow", Integer, nullable=True)
    price_range_high: Mapped[Optional[int]] = mapped_column("priceRangeHigh", Integer, nullable=True)
    property_type: Mapped[str] = mapped_column(
        "propertyType",
        String(100),
        nullable=False,
        default=DEFAULT_PROPERTY_TYPE,
    )
    bedrooms: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    bathrooms: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    square_footage: Mapped[Optional[int]] = mapped_column("squareFootage", Integer, nullable=True)
    year_built: Mapped[Optional[int]] = mapped_column("yearBuilt", Integer, nullable=True)
    last_sale: Mapped[Optional[str]] = mapped_column("lastSale", String(50), nullable=True)
    last_sale_price: Mapped[Optional[int]] = mapped_column("lastSalePrice", Integer, nullable=True)

    # Street-view URL derived from formattedAddress; "" when no maps key is configured
    image: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # ── Owner-editable fields (PUT) ───────────────────────────────────────
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    monthly_rent: Mapped[Optional[int]] = mapped_column("monthlyRent", Integer, nullable=True)
    mortgage_payment: Mapped[Optional[int]] = mapped_column("mortgagePayment", Integer, nullable=True)
    mortgage_balance: Mapped[Optional[int]] = mapped_column("mortgageBalance", Integer, nullable=True)
    hoa_payment: Mapped[Optional[int]] = mapped_column("hoaPayment", Integer, nullable=True)
    interest_rate: Mapped[Optional[float]] = mapped_column("interestRate", Float, nullable=True)

    __table_args__ = (
        Index("idx_properties_user_id", user_id),
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, user_id={self.user_id}, address='{self.formatted_address}')>"
