"""Core payment orchestrator.

Runs one payment through the pipeline:
  1. Validate (reject with every violation, no bank call, no storage)
  2. Mask the card number and map the request to the bank's format
  3. Ask the bank for a decision (bank errors propagate, nothing stored)
  4. Store the masked record and return it

Retries live inside the bank client; this layer never retries.
"""

import uuid
from typing import Optional
from uuid import UUID

from app.bank.client import BankClient
from app.errors import BankError, PaymentValidationError
from app.logging import logger, payment_id_ctx
from app.models import PaymentRecord, PaymentRequest, PaymentStatus
from app.payments.masking import mask_card_suffix, to_bank_request
from app.payments.validator import validate
from app.storage.memory import PaymentsRepository


class PaymentService:
    """Orchestrates validation, bank authorization and storage of payments."""

    def __init__(self, bank_client: BankClient, repository: PaymentsRepository) -> None:
        self.bank_client = bank_client
        self.repository = repository

    async def process(self, request: PaymentRequest) -> PaymentRecord:
        """Process a single payment and return its stored record.

        Raises:
            PaymentValidationError: The request failed validation.
            BankError: The bank gave no decision (unavailable, timeout, ...).
        """
        payment_id = uuid.uuid4()
        token = payment_id_ctx.set(str(payment_id))
        try:
            return await self._process(payment_id, request)
        finally:
            payment_id_ctx.reset(token)

    async def _process(self, payment_id: UUID, request: PaymentRequest) -> PaymentRecord:
        outcome = validate(request)
        if not outcome.is_valid:
            logger.info("payment rejected by validation errors=%s", "; ".join(outcome.errors))
            raise PaymentValidationError(outcome.errors)

        last_four = mask_card_suffix(request.card_number)
        bank_request = to_bank_request(request)

        try:
            bank_response = await self.bank_client.authorize(bank_request)
        except BankError as exc:
            logger.error("bank error, payment not stored kind=%s", exc.kind.value)
            raise

        status = PaymentStatus.AUTHORIZED if bank_response.authorized else PaymentStatus.DECLINED
        record = PaymentRecord(
            id=payment_id,
            status=status,
            card_number_last_four=last_four,
            expiry_month=request.expiry_month,
            expiry_year=request.expiry_year,
            currency=request.currency,
            amount=request.amount,
        )
        self.repository.add(record)

        logger.info(
            "payment processed status=%s last_four=%s amount=%s currency=%s",
            status.value,
            last_four,
            request.amount,
            request.currency,
        )
        return record

    def get(self, payment_id: UUID) -> Optional[PaymentRecord]:
        """Look up a previously processed payment."""
        return self.repository.get(payment_id)
