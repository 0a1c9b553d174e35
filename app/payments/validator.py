"""Payment request validation.

Every rule runs on every request; their messages are concatenated in a
fixed order so the caller sees all problems at once:
  1. Card number
  2. Expiry month
  3. Expiry year/month against today (UTC)
  4. Currency
  5. Amount
  6. CVV
"""

from datetime import date, datetime, timezone
from typing import Optional

from app.models import PaymentRequest, ValidationOutcome
from app.payments.rules.amount import check_amount
from app.payments.rules.card import check_card_number, check_cvv
from app.payments.rules.currency import check_currency
from app.payments.rules.expiry import check_expiry_date, check_expiry_month


def validate(request: PaymentRequest, today: Optional[date] = None) -> ValidationOutcome:
    """Run all validation rules against a payment request.

    Args:
        request: The payment to check.
        today: Date used for the expiry check. Defaults to the current UTC date.

    Returns:
        A successful outcome, or a failed one listing every violation.
    """
    if today is None:
        today = datetime.now(timezone.utc).date()

    rule_errors = [
        check_card_number(request.card_number),
        check_expiry_month(request.expiry_month),
        check_expiry_date(request.expiry_year, request.expiry_month, today),
        check_currency(request.currency),
        check_amount(request.amount),
        check_cvv(request.cvv),
    ]

    errors: list[str] = []
    for messages in rule_errors:
        errors.extend(messages)

    if errors:
        return ValidationOutcome.failure(errors)
    return ValidationOutcome.success()
