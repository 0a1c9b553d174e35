"""Card expiry rules.

A card is usable until the end of its expiry month, so a card expiring in
the current month still passes. The month range check and the date check
are independent: month 13 with a future year only fails the range check.
"""

from datetime import date

from app.constants import CardDetails


def check_expiry_month(expiry_month: int) -> list[str]:
    """Expiry month must lie in 1..12."""
    low, high = CardDetails.EXPIRY_MONTH_MIN, CardDetails.EXPIRY_MONTH_MAX
    if not low <= expiry_month <= high:
        return [f"Expiry month must be between {low} and {high}"]
    return []


def check_expiry_date(expiry_year: int, expiry_month: int, today: date) -> list[str]:
    """Expiry year/month must not be before the month containing `today`."""
    if expiry_year < today.year:
        return ["Expiry year must be in the future"]

    if expiry_year == today.year and expiry_month < today.month:
        return ["Expiry date must be in the future"]

    return []
