"""Fixed business rules and resilience policy numbers."""

from typing import Final


class CardDetails:
    """Card field limits enforced by the validator."""

    CARD_NUMBER_MIN_LENGTH: Final[int] = 14
    CARD_NUMBER_MAX_LENGTH: Final[int] = 19
    EXPIRY_MONTH_MIN: Final[int] = 1
    EXPIRY_MONTH_MAX: Final[int] = 12
    CURRENCY_LENGTH: Final[int] = 3
    AMOUNT_MINIMUM: Final[int] = 1
    CVV_MIN_LENGTH: Final[int] = 3
    CVV_MAX_LENGTH: Final[int] = 4
    MASKED_SUFFIX_LENGTH: Final[int] = 4


# Order matters: it is the order used in the validation message.
SUPPORTED_CURRENCIES: Final[tuple[str, ...]] = ("GBP", "EUR", "USD")


class BankResilience:
    """Retry, circuit breaker and timeout settings for the bank client."""

    PAYMENTS_PATH: Final[str] = "/payments"
    TIMEOUT_SECONDS: Final[float] = 10.0
    MAX_RETRIES: Final[int] = 3
    BACKOFF_MULTIPLIER_SECONDS: Final[float] = 2.0
    BREAKER_FAILURE_THRESHOLD: Final[int] = 5
    BREAKER_OPEN_SECONDS: Final[float] = 30.0
