"""
Search Criteria Models

Immutable query descriptions for buyer search, CMA comparable selection and
seller-update watches.
"""
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from src.cma.transformers.field_resolution import to_date, to_decimal, to_utc_datetime
from src.cma.transformers.status_normalizer import StandardStatus, normalize_status


class NumericRange(BaseModel):
    """Inclusive min/max bound; either side may be open."""

    model_config = ConfigDict(frozen=True)

    min: Optional[Decimal] = None
    max: Optional[Decimal] = None

    @field_validator("min", "max", mode="before")
    @classmethod
    def coerce_bound(cls, v):
        return to_decimal(v)

    @property
    def is_open(self) -> bool:
        return self.min is None and self.max is None

    def contains(self, value: Optional[Decimal]) -> bool:
        """
        Check a value against the bound.

        A missing value never satisfies a bound that constrains something.
        """
        if self.is_open:
            return True
        if value is None:
            return False
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True


# Range criterion -> PropertyRecord field it bounds
RANGE_FIELDS = {
    "list_price": "list_price",
    "bedrooms": "bedrooms_total",
    "main_level_bedrooms": "main_level_bedrooms",
    "full_baths": "bathrooms_full",
    "half_baths": "bathrooms_half",
    "total_baths": "bathrooms_total_integer",
    "living_area": "living_area",
    "lot_size_square_feet": "lot_size_square_feet",
    "lot_size_acres": "lot_size_acres",
    "year_built": "year_built",
    "garage_spaces": "garage_parking_spaces",
    "parking_spaces": "total_parking_spaces",
}

# Amenity criterion -> PropertyRecord flag
FLAG_FIELDS = {
    "flex_listing": "flex_listing_yn",
    "pool_private": "pool_private_yn",
    "waterfront": "waterfront_yn",
    "view": "view_yn",
    "horse": "horse_yn",
    "association": "association_yn",
}

# Exact-match criterion -> PropertyRecord field
EXACT_FIELDS = {
    "property_sale_contingency": "property_sale_contingency",
    "occupant_type": "occupant_type",
    "possession": "possession",
    "property_sub_type": "property_sub_type",
}

VALUE_SET_FIELDS = (
    "cities",
    "postal_codes",
    "subdivisions",
    "elementary_schools",
    "middle_schools",
    "high_schools",
    "schools",
    "school_districts",
    "counties",
)


def _fold_flat_bounds(data: dict) -> dict:
    """
    Fold flat bound keys into NumericRange objects.

    Query strings arrive as listPriceMin, list_price_min or yearBuilt.min;
    all of them land on the same range criterion.
    """
    folded = dict(data)
    for name in RANGE_FIELDS:
        camel = to_camel(name)
        bounds = {}
        for side in ("min", "max"):
            for key in (f"{name}_{side}", f"{camel}{side.capitalize()}", f"{camel}.{side}"):
                if key in folded:
                    value = folded.pop(key)
                    if value is not None and side not in bounds:
                        bounds[side] = value
        if not bounds:
            continue

        existing = folded.get(name, folded.get(camel))
        if isinstance(existing, NumericRange):
            existing = existing.model_dump()
        merged = dict(existing or {})
        merged.update(bounds)
        folded.pop(camel, None)
        folded[name] = merged
    return folded


class SearchCriteria(BaseModel):
    """
    Structured property search.

    Every populated criterion is an independent AND predicate. Constructed
    per request and never mutated.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    status: Optional[Tuple[StandardStatus, ...]] = None

    # Inclusive numeric bounds
    list_price: Optional[NumericRange] = None
    bedrooms: Optional[NumericRange] = None
    main_level_bedrooms: Optional[NumericRange] = None
    full_baths: Optional[NumericRange] = None
    half_baths: Optional[NumericRange] = None
    total_baths: Optional[NumericRange] = None
    living_area: Optional[NumericRange] = None
    lot_size_square_feet: Optional[NumericRange] = None
    lot_size_acres: Optional[NumericRange] = None
    year_built: Optional[NumericRange] = None
    garage_spaces: Optional[NumericRange] = None
    parking_spaces: Optional[NumericRange] = None

    # Accepted value sets
    cities: Optional[Tuple[str, ...]] = None
    postal_codes: Optional[Tuple[str, ...]] = Field(None, alias="zipCodes")
    subdivisions: Optional[Tuple[str, ...]] = None
    elementary_schools: Optional[Tuple[str, ...]] = None
    middle_schools: Optional[Tuple[str, ...]] = None
    high_schools: Optional[Tuple[str, ...]] = None
    schools: Optional[Tuple[str, ...]] = None
    school_districts: Optional[Tuple[str, ...]] = Field(None, alias="schoolDistrict")
    counties: Optional[Tuple[str, ...]] = None

    # Amenity flags
    flex_listing: Optional[bool] = None
    pool_private: Optional[bool] = None
    waterfront: Optional[bool] = None
    view: Optional[bool] = None
    horse: Optional[bool] = None
    association: Optional[bool] = None

    # Exact-match terms
    property_sale_contingency: Optional[str] = None
    occupant_type: Optional[str] = None
    possession: Optional[str] = None
    property_sub_type: Optional[str] = None

    # Closed listings must have closed on or after this date
    close_date_from: Optional[date] = None

    @model_validator(mode="before")
    @classmethod
    def fold_flat_bounds(cls, data):
        if isinstance(data, dict):
            return _fold_flat_bounds(data)
        return data

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, v):
        """Accept a single status or a list of labels, codes or API values."""
        if v is None:
            return None
        if isinstance(v, (str, StandardStatus)):
            v = [v]
        statuses = []
        for raw in v:
            status = normalize_status(raw)
            if status is None:
                raise ValueError(f"Unknown listing status: {raw!r}")
            if status not in statuses:
                statuses.append(status)
        return tuple(statuses)

    @field_validator(*VALUE_SET_FIELDS, mode="before")
    @classmethod
    def coerce_value_set(cls, v):
        """Strip entries and drop blanks; a single string is a one-item set."""
        if v is None:
            return None
        if isinstance(v, str):
            v = [v]
        return tuple(str(item).strip() for item in v if item is not None and str(item).strip())

    @field_validator("close_date_from", mode="before")
    @classmethod
    def coerce_close_date(cls, v):
        return to_date(v)


class EmailFrequency(str, Enum):
    """How often a seller update is sent."""
    DAILY = "daily"
    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    MONTHLY = "monthly"


class SellerUpdateCriteria(BaseModel):
    """
    A saved seller-update watch.

    postal_code is required by the product, but an empty one disables the
    postal filter and watches every visible listing.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )

    id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    postal_code: Optional[str] = None
    elementary_school: Optional[str] = None
    property_sub_type: Optional[str] = None
    email_frequency: EmailFrequency = EmailFrequency.WEEKLY
    last_sent_at: Optional[datetime] = None
    is_active: bool = True

    @field_validator("last_sent_at", mode="before")
    @classmethod
    def coerce_last_sent_at(cls, v):
        return to_utc_datetime(v)

    @field_validator("email_frequency", mode="before")
    @classmethod
    def coerce_frequency(cls, v):
        """Unknown frequencies fall back to weekly."""
        if v is None:
            return EmailFrequency.WEEKLY
        if isinstance(v, EmailFrequency):
            return v
        try:
            return EmailFrequency(str(v).strip().lower())
        except ValueError:
            return EmailFrequency.WEEKLY
