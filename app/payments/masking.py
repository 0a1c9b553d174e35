"""Card masking and bank request mapping."""

from app.constants import CardDetails
from app.models import BankPaymentRequest, PaymentRequest


def mask_card_suffix(card_number: str) -> str:
    """Return the last four digits of a card number, or "" if it is malformed.

    The suffix stays a string so leading zeros survive ("...0001" -> "0001").
    """
    size = CardDetails.MASKED_SUFFIX_LENGTH
    if not card_number or len(card_number) < size:
        return ""
    if not all("0" <= ch <= "9" for ch in card_number):
        return ""
    return card_number[-size:]


def to_bank_request(request: PaymentRequest) -> BankPaymentRequest:
    """Project a payment request onto the bank's wire format."""
    return BankPaymentRequest(
        card_number=request.card_number,
        expiry_date=f"{request.expiry_month:02d}/{request.expiry_year}",
        currency=request.currency,
        amount=request.amount,
        cvv=request.cvv,
    )
