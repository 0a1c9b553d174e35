"""Currency rule.

Only a small fixed set of ISO 4217 codes is accepted. Membership is only
checked once the code has the right length, so a wrong-length code gets a
single, specific message.
"""

from app.constants import SUPPORTED_CURRENCIES, CardDetails


def check_currency(currency: str) -> list[str]:
    """Currency must be a supported 3-letter code (case-insensitive)."""
    if not currency or not currency.strip():
        return ["Currency is required"]

    if len(currency) != CardDetails.CURRENCY_LENGTH:
        return [f"Currency must be exactly {CardDetails.CURRENCY_LENGTH} characters"]

    if currency.upper() not in SUPPORTED_CURRENCIES:
        return [f"Currency must be one of: {', '.join(SUPPORTED_CURRENCIES)}"]

    return []
