"""Pydantic models for the payment gateway API and the bank wire format."""

from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class PaymentRequest(BaseModel):
    """Incoming card payment to be processed.

    String fields default to empty so a missing value is reported by the
    validator alongside every other violation, not by schema parsing.
    """
    model_config = ConfigDict(frozen=True)

    card_number: str = ""
    expiry_month: int
    expiry_year: int
    currency: str = ""
    amount: int  # minor currency units
    cvv: str = ""


class ValidationOutcome(BaseModel):
    """Result of running every validation rule over a request."""
    model_config = ConfigDict(frozen=True)

    is_valid: bool
    errors: list[str]

    @classmethod
    def success(cls) -> "ValidationOutcome":
        return cls(is_valid=True, errors=[])

    @classmethod
    def failure(cls, errors: list[str]) -> "ValidationOutcome":
        return cls(is_valid=False, errors=list(errors))


class BankPaymentRequest(BaseModel):
    """Payment as sent to the bank (expiry combined as MM/YYYY)."""
    model_config = ConfigDict(frozen=True)

    card_number: str
    expiry_date: str
    currency: str
    amount: int
    cvv: str


class BankPaymentResponse(BaseModel):
    """Authorization decision returned by the bank."""
    authorized: bool
    authorization_code: str = ""


class PaymentStatus(str, Enum):
    AUTHORIZED = "Authorized"
    DECLINED = "Declined"


class PaymentRecord(BaseModel):
    """A processed payment, stored with the card number masked."""
    model_config = ConfigDict(frozen=True)

    id: UUID
    status: PaymentStatus
    card_number_last_four: str
    expiry_month: int
    expiry_year: int
    currency: str
    amount: int


class ErrorResponse(BaseModel):
    """Generic error body; never carries bank diagnostics."""
    error: str


class ValidationErrorResponse(BaseModel):
    """Every violation found in a rejected request."""
    errors: list[str]
