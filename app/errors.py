"""Exception taxonomy for the payment pipeline.

Validation failures and bank failures are the only errors that reach the
HTTP layer. Bank failures carry a BankErrorKind decided at the point where
the HTTP call is made, so nothing downstream has to inspect messages.
"""

from enum import Enum
from typing import Optional


class PaymentGatewayError(Exception):
    """Base class for errors raised by the payment pipeline."""


class PaymentValidationError(PaymentGatewayError):
    """The request broke one or more validation rules."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("Payment request validation failed")


class BankErrorKind(str, Enum):
    SERVICE_UNAVAILABLE = "service_unavailable"
    BAD_REQUEST = "bad_request"
    TIMEOUT = "timeout"
    MALFORMED_RESPONSE = "malformed_response"
    CONNECTION_ERROR = "connection_error"
    UNEXPECTED_STATUS = "unexpected_status"


class BankError(PaymentGatewayError):
    """A bank call ended without an authorization decision.

    `transient` marks failures worth retrying and counting against the
    circuit breaker. `detail` holds bank diagnostics for logs only.
    """

    def __init__(
        self,
        kind: BankErrorKind,
        message: str,
        detail: Optional[str] = None,
        transient: bool = False,
        status_code: Optional[int] = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.detail = detail
        self.transient = transient
        self.status_code = status_code
        super().__init__(message)

    @property
    def unavailable(self) -> bool:
        """True when the bank could not be reached or refused service."""
        return self.kind in (
            BankErrorKind.SERVICE_UNAVAILABLE,
            BankErrorKind.CONNECTION_ERROR,
        )


class CircuitOpenError(PaymentGatewayError):
    """Raised by the circuit breaker while it is rejecting calls."""

    def __init__(self, message: str = "Circuit breaker is open") -> None:
        self.message = message
        super().__init__(message)
