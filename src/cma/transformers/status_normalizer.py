"""
Listing Status Normalization

Maps MLS abbreviations, API query values and RESO labels onto StandardStatus.
"""
from enum import Enum
from typing import Optional


class StandardStatus(str, Enum):
    """RESO standard listing lifecycle states."""
    ACTIVE = "Active"
    ACTIVE_UNDER_CONTRACT = "Active Under Contract"
    PENDING = "Pending"
    CLOSED = "Closed"
    EXPIRED = "Expired"
    WITHDRAWN = "Withdrawn"
    CANCELLED = "Cancelled"
    TERMINATED = "Terminated"


# Abbreviated codes used by some MLS systems
STATUS_ABBREVIATIONS = {
    "A": StandardStatus.ACTIVE,
    "AU": StandardStatus.ACTIVE_UNDER_CONTRACT,
    "P": StandardStatus.PENDING,
    "C": StandardStatus.CLOSED,
    "S": StandardStatus.CLOSED,
    "Lc": StandardStatus.ACTIVE_UNDER_CONTRACT,
    "Sc": StandardStatus.ACTIVE_UNDER_CONTRACT,
}

# Lowercased API / free-text values
STATUS_ALIASES = {
    "active": StandardStatus.ACTIVE,
    "under_contract": StandardStatus.ACTIVE_UNDER_CONTRACT,
    "active_under_contract": StandardStatus.ACTIVE_UNDER_CONTRACT,
    "active under contract": StandardStatus.ACTIVE_UNDER_CONTRACT,
    "under contract": StandardStatus.ACTIVE_UNDER_CONTRACT,
    "undercontract": StandardStatus.ACTIVE_UNDER_CONTRACT,
    "pending": StandardStatus.PENDING,
    "closed": StandardStatus.CLOSED,
    "sold": StandardStatus.CLOSED,
    "expired": StandardStatus.EXPIRED,
    "withdrawn": StandardStatus.WITHDRAWN,
    "cancelled": StandardStatus.CANCELLED,
    "canceled": StandardStatus.CANCELLED,
    "terminated": StandardStatus.TERMINATED,
}


def normalize_status(value) -> Optional[StandardStatus]:
    """
    Normalize a raw status value to a StandardStatus.

    Checks, in order: an existing StandardStatus, an exact RESO label,
    an MLS abbreviation, then a case-insensitive API alias.

    Args:
        value: Raw status (str, StandardStatus or None)

    Returns:
        StandardStatus, or None when the value is empty or unrecognized
    """
    if value is None:
        return None
    if isinstance(value, StandardStatus):
        return value

    text = str(value).strip()
    if not text:
        return None

    for status in StandardStatus:
        if status.value == text:
            return status

    if text in STATUS_ABBREVIATIONS:
        return STATUS_ABBREVIATIONS[text]

    return STATUS_ALIASES.get(text.lower())


def is_active_status(value) -> bool:
    """Active and Active Under Contract both count as on the market."""
    return normalize_status(value) in (
        StandardStatus.ACTIVE,
        StandardStatus.ACTIVE_UNDER_CONTRACT,
    )


def is_closed_status(value) -> bool:
    return normalize_status(value) == StandardStatus.CLOSED


def is_under_contract_status(value) -> bool:
    return normalize_status(value) in (
        StandardStatus.ACTIVE_UNDER_CONTRACT,
        StandardStatus.PENDING,
    )
