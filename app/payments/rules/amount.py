"""Payment amount rule.

Amounts are integers in the currency's minor unit (pence, cents), so the
smallest payable amount is 1.
"""

from app.constants import CardDetails


def check_amount(amount: int) -> list[str]:
    """Reject zero and negative amounts."""
    if amount < CardDetails.AMOUNT_MINIMUM:
        return [
            f"Amount must be at least {CardDetails.AMOUNT_MINIMUM} minor currency unit"
        ]
    return []
