"""Retry and circuit breaking around each bank call.

Each attempt goes through the circuit breaker. Transient failures are
retried MAX_RETRIES times with exponential backoff (2s, 4s, 8s). A rejection
from an open circuit is not retried.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from app.bank.circuit_breaker import CircuitBreaker
from app.constants import BankResilience
from app.errors import BankError
from app.logging import logger

T = TypeVar("T")


def is_transient(exc: BaseException) -> bool:
    """Failures that are retried and counted by the circuit breaker."""
    return isinstance(exc, BankError) and exc.transient


class ResiliencePolicy:
    """Retry-with-backoff over a shared circuit breaker.

    One instance belongs to one BankClient and is shared by every
    concurrent call made through it.
    """

    def __init__(
        self,
        breaker: Optional[CircuitBreaker] = None,
        max_retries: int = BankResilience.MAX_RETRIES,
        backoff_multiplier: float = BankResilience.BACKOFF_MULTIPLIER_SECONDS,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.breaker = breaker or CircuitBreaker(
            failure_threshold=BankResilience.BREAKER_FAILURE_THRESHOLD,
            open_seconds=BankResilience.BREAKER_OPEN_SECONDS,
            is_failure=is_transient,
        )
        self.max_retries = max_retries
        self.backoff_multiplier = backoff_multiplier
        self._sleep = sleep

    def _retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=wait_exponential(multiplier=self.backoff_multiplier),
            retry=retry_if_exception(is_transient),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            sleep=self._sleep,
            reraise=True,
        )

    async def execute(self, func: Callable[[], Awaitable[T]]) -> T:
        """Run `func` under the policy and return its result.

        Raises:
            CircuitOpenError: If the breaker rejected an attempt.
            BankError: The last failure once retries are exhausted, or the
                first non-transient failure.
        """
        return await self._retrying()(self.breaker.call, func)
