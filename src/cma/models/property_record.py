"""
Property Record Data Model

Pydantic model for one MLS listing snapshot.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.cma.transformers.field_resolution import (
    to_date,
    to_decimal,
    to_int,
    to_utc_datetime,
)
from src.cma.transformers.status_normalizer import StandardStatus, normalize_status

DECIMAL_FIELDS = (
    "list_price",
    "close_price",
    "original_list_price",
    "living_area",
    "lot_size_square_feet",
    "lot_size_acres",
)

INTEGER_FIELDS = (
    "bedrooms_total",
    "bathrooms_full",
    "bathrooms_half",
    "bathrooms_total_integer",
    "main_level_bedrooms",
    "year_built",
    "garage_parking_spaces",
    "total_parking_spaces",
    "days_on_market",
    "cumulative_days_on_market",
)

FLAG_FIELDS = (
    "flex_listing_yn",
    "pool_private_yn",
    "waterfront_yn",
    "view_yn",
    "horse_yn",
    "association_yn",
)

TRUE_FLAG_VALUES = {"y", "yes", "true", "1", "t"}
FALSE_FLAG_VALUES = {"n", "no", "false", "0", "f"}


class PropertyRecord(BaseModel):
    """
    One listing snapshot from the property store.

    Field names follow RESO in snake_case; the camelCase RESO names are
    accepted as aliases. Numeric fields that arrive as blanks or
    non-numeric text become None rather than failing validation, so a
    bad field only drops the record out of the metrics that read it.

    Attributes:
        id: Stable store identifier
        listing_id: MLS listing number
        standard_status: Normalized lifecycle state
        list_price: Current asking price
        close_price: Realized sale price (Closed listings)
        living_area: Finished square footage
        modification_timestamp: Last change in the source feed (UTC)
        unparsed_address: Single-line street address
        mlg_can_view: Visibility flag; False hides the listing everywhere
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )

    id: str = Field(..., min_length=1, description="Stable property identifier")
    listing_id: Optional[str] = Field(None, description="MLS listing number")
    standard_status: Optional[StandardStatus] = Field(None, description="RESO standard status")
    property_type: Optional[str] = Field(None, description="Property type")
    property_sub_type: Optional[str] = Field(None, description="Property sub type")

    # Pricing
    list_price: Optional[Decimal] = Field(None, description="List price")
    close_price: Optional[Decimal] = Field(None, description="Close price")
    original_list_price: Optional[Decimal] = Field(None, description="Original list price")

    # Structure
    bedrooms_total: Optional[int] = Field(None, description="Total bedrooms")
    main_level_bedrooms: Optional[int] = Field(None, description="Main level bedrooms")
    bathrooms_full: Optional[int] = Field(None, description="Full bathrooms")
    bathrooms_half: Optional[int] = Field(None, description="Half bathrooms")
    bathrooms_total_integer: Optional[int] = Field(None, description="Total bathrooms")
    living_area: Optional[Decimal] = Field(None, description="Living area sqft")
    lot_size_square_feet: Optional[Decimal] = Field(None, description="Lot size sqft")
    lot_size_acres: Optional[Decimal] = Field(None, description="Lot size acres")
    year_built: Optional[int] = Field(None, description="Year built")
    garage_parking_spaces: Optional[int] = Field(None, description="Garage spaces")
    total_parking_spaces: Optional[int] = Field(None, description="Parking spaces")

    # Market timing
    days_on_market: Optional[int] = Field(None, description="Days on market")
    cumulative_days_on_market: Optional[int] = Field(None, description="Cumulative days on market")
    listing_contract_date: Optional[date] = Field(None, description="Listing contract date")
    close_date: Optional[date] = Field(None, description="Close date")
    modification_timestamp: Optional[datetime] = Field(None, description="Last modification (UTC)")

    # Location
    unparsed_address: Optional[str] = Field(None, description="Street address")
    city: Optional[str] = Field(None, description="City")
    postal_code: Optional[str] = Field(None, description="ZIP code")
    subdivision: Optional[str] = Field(None, description="Subdivision name")
    county_or_parish: Optional[str] = Field(None, description="County")

    # Schools
    elementary_school: Optional[str] = Field(None, description="Elementary school")
    middle_or_junior_school: Optional[str] = Field(None, description="Middle school")
    high_school: Optional[str] = Field(None, description="High school")
    school_district: Optional[str] = Field(None, description="School district")

    # Amenity flags
    flex_listing_yn: Optional[bool] = Field(None, alias="flexListingYN")
    pool_private_yn: Optional[bool] = Field(None, alias="poolPrivateYN")
    waterfront_yn: Optional[bool] = Field(None, alias="waterfrontYN")
    view_yn: Optional[bool] = Field(None, alias="viewYN")
    horse_yn: Optional[bool] = Field(None, alias="horseYN")
    association_yn: Optional[bool] = Field(None, alias="associationYN")

    # Terms
    property_sale_contingency: Optional[str] = Field(None, description="Sale contingency")
    occupant_type: Optional[str] = Field(None, description="Occupant type")
    possession: Optional[str] = Field(None, description="Possession terms")

    mlg_can_view: bool = Field(True, description="Visibility flag")

    @field_validator(*DECIMAL_FIELDS, mode="before")
    @classmethod
    def coerce_decimal(cls, v):
        """Non-numeric values become None."""
        return to_decimal(v)

    @field_validator(*INTEGER_FIELDS, mode="before")
    @classmethod
    def coerce_integer(cls, v):
        """Non-integral values become None."""
        return to_int(v)

    @field_validator(*FLAG_FIELDS, mode="before")
    @classmethod
    def coerce_flag(cls, v):
        """Accept Y/N style flags; anything unrecognized is unknown."""
        if v is None or isinstance(v, bool):
            return v
        text = str(v).strip().lower()
        if text in TRUE_FLAG_VALUES:
            return True
        if text in FALSE_FLAG_VALUES:
            return False
        return None

    @field_validator("standard_status", mode="before")
    @classmethod
    def coerce_status(cls, v):
        return normalize_status(v)

    @field_validator("listing_contract_date", "close_date", mode="before")
    @classmethod
    def coerce_date(cls, v):
        return to_date(v)

    @field_validator("modification_timestamp", mode="before")
    @classmethod
    def coerce_timestamp(cls, v):
        return to_utc_datetime(v)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        """Numeric store keys are carried as strings."""
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("mlg_can_view", mode="before")
    @classmethod
    def coerce_visibility(cls, v):
        """A null visibility flag hides the listing."""
        if v is None:
            return False
        return v

    @property
    def is_visible(self) -> bool:
        return self.mlg_can_view is True

    def school_names(self) -> tuple:
        """All populated school names across levels."""
        return tuple(
            name for name in (
                self.elementary_school,
                self.middle_or_junior_school,
                self.high_school,
            )
            if name
        )
