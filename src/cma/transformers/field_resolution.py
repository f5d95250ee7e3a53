"""
Field Coercion and Ordered Fallback Resolution

Listing feeds carry numbers as strings, blanks, zero placeholders and
duplicated fields (days on market vs cumulative days on market). Every
numeric read in the engine goes through these helpers so a missing or
non-numeric value is excluded the same way everywhere.
"""
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Sequence

from dateutil import parser as date_parser

from src.cma.transformers.status_normalizer import StandardStatus, normalize_status

SQUARE_FEET_PER_ACRE = Decimal("43560")

# Precedence lists: the first candidate holding a positive value wins.
DAYS_ON_MARKET_PRECEDENCE = ("days_on_market", "cumulative_days_on_market")
BATHROOMS_PRECEDENCE = ("bathrooms_total_integer", "bathrooms_full")


def to_decimal(value: Any) -> Optional[Decimal]:
    """
    Coerce a raw field value to Decimal.

    Floats go through str() so 0.1 stays 0.1. Booleans, blanks, NaN,
    infinities and unparseable strings all yield None.

    Args:
        value: Raw value from a listing feed or ORM column

    Returns:
        Decimal or None
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip().replace(",", "").replace("$", "")
        if not text:
            return None
        try:
            result = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None

    if not result.is_finite():
        return None
    return result


def to_int(value: Any) -> Optional[int]:
    """Coerce to int, dropping values with a fractional part."""
    number = to_decimal(value)
    if number is None or number != number.to_integral_value():
        return None
    return int(number)


def to_positive_decimal(value: Any) -> Optional[Decimal]:
    """
    Coerce to Decimal and keep only strictly positive values.

    Zero is a placeholder in MLS data (0 bedrooms, 0 days on market),
    not a measurement, so it is treated as missing.
    """
    number = to_decimal(value)
    if number is None or number <= 0:
        return None
    return number


def to_date(value: Any) -> Optional[date]:
    """Coerce a date, datetime or date string to a date; None when unparseable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date_parser.parse(value.strip()).date()
        except (ValueError, OverflowError):
            return None
    return None


def to_utc_datetime(value: Any) -> Optional[datetime]:
    """
    Coerce to a timezone-aware UTC datetime.

    Naive values are taken to be UTC. Plain dates map to midnight.
    """
    if value is None:
        return None
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            value = date_parser.parse(value.strip())
        except (ValueError, OverflowError):
            return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    return None


def resolve_first_positive(record: Any, field_names: Sequence[str]) -> Optional[Decimal]:
    """
    Return the first strictly positive value among field_names.

    Args:
        record: Object exposing the fields as attributes
        field_names: Ordered precedence list

    Returns:
        Decimal or None when no candidate holds a positive value
    """
    for name in field_names:
        value = to_positive_decimal(getattr(record, name, None))
        if value is not None:
            return value
    return None


def resolve_days_on_market(record: Any) -> Optional[Decimal]:
    """days_on_market, then cumulative_days_on_market."""
    return resolve_first_positive(record, DAYS_ON_MARKET_PRECEDENCE)


def resolve_bathrooms(record: Any) -> Optional[Decimal]:
    """bathrooms_total_integer, then bathrooms_full."""
    return resolve_first_positive(record, BATHROOMS_PRECEDENCE)


def resolve_acres(record: Any) -> Optional[Decimal]:
    """lot_size_acres, then lot_size_square_feet converted to acres."""
    acres = to_positive_decimal(getattr(record, "lot_size_acres", None))
    if acres is not None:
        return acres

    square_feet = to_positive_decimal(getattr(record, "lot_size_square_feet", None))
    if square_feet is not None:
        return square_feet / SQUARE_FEET_PER_ACRE
    return None


def resolve_effective_price(record: Any) -> Optional[Decimal]:
    """
    Realized price for sold comps, asking price for everything else.

    A Closed record is priced by close_price only; its list price is never
    substituted.

    Returns:
        Strictly positive Decimal or None
    """
    if normalize_status(getattr(record, "standard_status", None)) == StandardStatus.CLOSED:
        # Intentionally no list-price fallback: a sold comp without a close
        # price is left out rather than priced at its asking price.
        return to_positive_decimal(getattr(record, "close_price", None))
    return to_positive_decimal(getattr(record, "list_price", None))


def resolve_price_per_square_foot(record: Any) -> Optional[Decimal]:
    """Effective price over living area; None unless both are positive."""
    price = resolve_effective_price(record)
    area = to_positive_decimal(getattr(record, "living_area", None))
    if price is None or area is None:
        return None
    return price / area
