"""Payment submission and retrieval endpoints."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Request

from app.models import ErrorResponse, PaymentRecord, PaymentRequest, ValidationErrorResponse
from app.payments.service import PaymentService

router = APIRouter(prefix="/api")


def _get_service(request: Request) -> PaymentService:
    """Retrieve the payment service from application state."""
    return request.app.state.payment_service


@router.post(
    "/payments",
    response_model=PaymentRecord,
    responses={
        400: {"model": ValidationErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def process_payment(
    payment: PaymentRequest,
    request: Request,
) -> PaymentRecord:
    """Process a card payment.

    Authorized and Declined payments both return 200; the outcome is in
    `status`. Validation and bank errors are mapped by the handlers in
    app.main.
    """
    return await _get_service(request).process(payment)


@router.get(
    "/payments/{payment_id}",
    response_model=PaymentRecord,
    responses={404: {"description": "Payment not found"}},
)
async def get_payment(payment_id: UUID, request: Request) -> PaymentRecord:
    """Retrieve a previously processed payment by id."""
    record = _get_service(request).get(payment_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Payment not found")
    return record
