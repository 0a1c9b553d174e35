"""Card number and CVV rules.

Both fields are digit strings with a length window, so they share one
check: required first, then length and character set reported
independently of each other.
"""

from app.constants import CardDetails


def _is_decimal(value: str) -> bool:
    # str.isdigit() also accepts superscripts and other Unicode digits.
    return all("0" <= ch <= "9" for ch in value)


def _check_digit_field(
    value: str,
    label: str,
    min_length: int,
    max_length: int,
) -> list[str]:
    if not value or not value.strip():
        return [f"{label} is required"]

    errors: list[str] = []
    if not min_length <= len(value) <= max_length:
        errors.append(
            f"{label} must be between {min_length} and {max_length} characters long"
        )
    if not _is_decimal(value):
        errors.append(f"{label} must only contain numeric characters")
    return errors


def check_card_number(card_number: str) -> list[str]:
    """Card number must be 14-19 decimal digits."""
    return _check_digit_field(
        card_number,
        "Card number",
        CardDetails.CARD_NUMBER_MIN_LENGTH,
        CardDetails.CARD_NUMBER_MAX_LENGTH,
    )


def check_cvv(cvv: str) -> list[str]:
    """CVV must be 3-4 decimal digits."""
    return _check_digit_field(
        cvv,
        "CVV",
        CardDetails.CVV_MIN_LENGTH,
        CardDetails.CVV_MAX_LENGTH,
    )
