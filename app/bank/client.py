"""HTTP client for the bank's authorization endpoint.

Every failure is turned into a BankError with a BankErrorKind right where
the HTTP call is made:

    503                       -> SERVICE_UNAVAILABLE (retried)
    400                       -> BAD_REQUEST (never retried)
    other 5xx, 408            -> UNEXPECTED_STATUS (retried)
    other non-2xx             -> UNEXPECTED_STATUS
    any transport failure     -> SERVICE_UNAVAILABLE (retried)
    no full response in time  -> TIMEOUT
    2xx with unparseable body -> MALFORMED_RESPONSE
    circuit open              -> SERVICE_UNAVAILABLE
"""

import asyncio
from typing import Optional

import httpx
from pydantic import ValidationError

from app.bank.resilience import ResiliencePolicy
from app.constants import BankResilience
from app.errors import BankError, BankErrorKind, CircuitOpenError
from app.logging import logger
from app.models import BankPaymentRequest, BankPaymentResponse

UNAVAILABLE_MESSAGE = "Bank service is unavailable"


class BankClient:
    """Sends payments to the bank under a retry and circuit breaker policy."""

    def __init__(
        self,
        base_url: str,
        http_client: Optional[httpx.AsyncClient] = None,
        policy: Optional[ResiliencePolicy] = None,
        timeout: float = BankResilience.TIMEOUT_SECONDS,
    ) -> None:
        self.url = base_url.rstrip("/") + BankResilience.PAYMENTS_PATH
        self.policy = policy or ResiliencePolicy()
        self.timeout = timeout
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    async def authorize(self, request: BankPaymentRequest) -> BankPaymentResponse:
        """Ask the bank to authorize a payment.

        Raises:
            BankError: If no authorization decision could be obtained.
        """
        payload = request.model_dump()
        logger.debug(
            "sending payment to bank url=%s amount=%s currency=%s",
            self.url,
            request.amount,
            request.currency,
        )
        try:
            result = await self.policy.execute(lambda: self._send(payload))
        except CircuitOpenError as exc:
            logger.debug("bank call rejected: %s", exc.message)
            raise BankError(BankErrorKind.SERVICE_UNAVAILABLE, UNAVAILABLE_MESSAGE) from exc

        logger.info("bank decision received authorized=%s", result.authorized)
        return result

    async def _send(self, payload: dict) -> BankPaymentResponse:
        """One HTTP attempt, classified into a BankError on failure."""
        try:
            # Deadline covers the whole exchange, body included.
            response = await asyncio.wait_for(
                self._http.post(self.url, json=payload, timeout=self.timeout),
                self.timeout,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
            raise BankError(BankErrorKind.TIMEOUT, "Bank request timed out") from exc
        except httpx.TransportError as exc:
            raise BankError(
                BankErrorKind.SERVICE_UNAVAILABLE,
                UNAVAILABLE_MESSAGE,
                detail=type(exc).__name__,
                transient=True,
            ) from exc

        status = response.status_code
        logger.debug("bank responded status=%s", status)

        if status == httpx.codes.SERVICE_UNAVAILABLE:
            raise BankError(
                BankErrorKind.SERVICE_UNAVAILABLE,
                UNAVAILABLE_MESSAGE,
                transient=True,
                status_code=status,
            )

        if status == httpx.codes.BAD_REQUEST:
            raise BankError(
                BankErrorKind.BAD_REQUEST,
                "Bank rejected the request",
                detail=response.text,
                status_code=status,
            )

        if not response.is_success:
            raise BankError(
                BankErrorKind.UNEXPECTED_STATUS,
                f"Bank returned status {status}",
                detail=response.text,
                transient=status >= 500 or status == httpx.codes.REQUEST_TIMEOUT,
                status_code=status,
            )

        body = response.text
        try:
            return BankPaymentResponse.model_validate_json(body)
        except ValidationError as exc:
            raise BankError(
                BankErrorKind.MALFORMED_RESPONSE,
                "Bank returned an invalid response",
                detail=body,
                status_code=status,
            ) from exc

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http.aclose()

    async def __aenter__(self) -> "BankClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
