"""Payment Gateway API.

Accepts card payments, validates them, asks the acquiring bank for an
authorization decision and stores a masked record of every payment the
bank decided on.

Run with:
    python3 -m uvicorn app.main:app --host 0.0.0.0 --port 8000
"""

from typing import Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.bank.client import BankClient
from app.config import settings
from app.errors import BankError, BankErrorKind, PaymentValidationError
from app.logging import configure_logging, logger
from app.payments.service import PaymentService
from app.routes import payments
from app.storage.memory import PaymentsRepository

app = FastAPI(
    title="Payment Gateway API",
    description="API for processing and retrieving card payments.",
    version="1.0.0",
)


@app.on_event("startup")
async def startup() -> None:
    """Wire the repository, bank client and payment service."""
    configure_logging()

    repository = PaymentsRepository()
    bank_client = BankClient(settings.bank_simulator_base_url)

    # Attach to app state for dependency injection in routes
    app.state.repository = repository
    app.state.bank_client = bank_client
    app.state.payment_service = PaymentService(bank_client, repository)
    logger.info("startup bank_url=%s", settings.bank_simulator_base_url)


@app.on_event("shutdown")
async def shutdown() -> None:
    await app.state.bank_client.aclose()


@app.exception_handler(PaymentValidationError)
async def validation_error_handler(_: Request, exc: PaymentValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"errors": exc.errors})


@app.exception_handler(BankError)
async def bank_error_handler(_: Request, exc: BankError) -> JSONResponse:
    """Map bank failures to generic messages; bank bodies never leak out."""
    if exc.unavailable:
        return JSONResponse(status_code=503, content={"error": "Bank service is unavailable"})
    if exc.kind == BankErrorKind.TIMEOUT:
        return JSONResponse(status_code=500, content={"error": "Bank request timed out"})
    return JSONResponse(
        status_code=500,
        content={"error": "An error occurred while processing the payment"},
    )


app.include_router(payments.router)


@app.get("/health")
async def health_check() -> Dict[str, str]:
    """Simple health check endpoint."""
    return {"status": "healthy"}
