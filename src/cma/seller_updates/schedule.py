"""
Seller-Update Scheduling

Send intervals per email frequency. Calendar months come from
dateutil's relativedelta so Jan 31 + 1 month lands on Feb 28/29.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

from config.settings import settings
from src.cma.models.criteria import EmailFrequency, SellerUpdateCriteria
from src.cma.transformers.field_resolution import to_utc_datetime

SEND_INTERVALS = {
    EmailFrequency.DAILY: timedelta(days=1),
    EmailFrequency.WEEKLY: timedelta(days=7),
    EmailFrequency.BI_WEEKLY: timedelta(days=14),
    EmailFrequency.MONTHLY: relativedelta(months=1),
}


def parse_frequency(frequency: Union[str, EmailFrequency, None]) -> EmailFrequency:
    """Map a stored frequency string to EmailFrequency, defaulting to weekly."""
    if isinstance(frequency, EmailFrequency):
        return frequency
    try:
        return EmailFrequency(str(frequency or "").strip().lower())
    except ValueError:
        return EmailFrequency.WEEKLY


def calculate_next_send_date(
    frequency: Union[str, EmailFrequency, None],
    from_date: Optional[datetime] = None,
) -> datetime:
    """
    Next scheduled send after from_date.

    Args:
        frequency: daily, weekly, bi-weekly or monthly (anything else is weekly)
        from_date: Base time (defaults to now, UTC)

    Returns:
        Datetime advanced by one interval with the time pinned to the send
        hour (settings.seller_update_send_hour, 09:00 by default)
    """
    base = from_date if from_date is not None else datetime.now(timezone.utc)
    next_send = base + SEND_INTERVALS[parse_frequency(frequency)]
    return next_send.replace(
        hour=settings.seller_update_send_hour,
        minute=0,
        second=0,
        microsecond=0,
    )


def is_due(criteria: SellerUpdateCriteria, now: Optional[datetime] = None) -> bool:
    """
    Check whether a watch should be sent.

    Inactive watches are never due; a watch that has never been sent is
    always due. Otherwise one full interval must have passed since
    last_sent_at.

    Args:
        criteria: Seller-update watch
        now: Current time (defaults to now, UTC)

    Returns:
        True when a digest should be produced
    """
    if not criteria.is_active:
        return False

    last_sent = to_utc_datetime(criteria.last_sent_at)
    if last_sent is None:
        return True

    now = to_utc_datetime(now) or datetime.now(timezone.utc)
    return now >= last_sent + SEND_INTERVALS[parse_frequency(criteria.email_frequency)]
