"""Async circuit breaker for calls to the bank.

States:
    CLOSED    -> calls pass through; consecutive handled failures are counted.
    OPEN      -> calls are rejected with CircuitOpenError until the open
                 period has elapsed.
    HALF_OPEN -> exactly one trial call is let through; success closes the
                 circuit, a handled failure reopens it.

State is shared by every caller of the instance and only touched while
holding an asyncio.Lock. The lock is never held across the protected call.
"""

import asyncio
import time
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, TypeVar

from app.errors import CircuitOpenError
from app.logging import logger

T = TypeVar("T")


class CircuitState(Enum):
    """Circuit breaker states."""

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


def _count_everything(_: BaseException) -> bool:
    return True


class CircuitBreaker:
    """Consecutive-failure circuit breaker with a single half-open trial."""

    def __init__(
        self,
        failure_threshold: int = 5,
        open_seconds: float = 30.0,
        is_failure: Callable[[BaseException], bool] = _count_everything,
        name: str = "bank",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Args:
            failure_threshold: Consecutive handled failures that open the circuit.
            open_seconds: How long the circuit rejects calls once open.
            is_failure: Decides whether an exception counts as a handled failure.
                Exceptions it rejects pass through without touching the counters.
            name: Label used in log messages.
            clock: Monotonic time source, injectable for tests.
        """
        self.failure_threshold = failure_threshold
        self.open_seconds = open_seconds
        self.name = name
        self._is_failure = is_failure
        self._clock = clock

        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._opened_at: Optional[float] = None
        self._trial_in_flight = False
        self._lock = asyncio.Lock()

    @property
    def state(self) -> CircuitState:
        return self._state

    @property
    def failure_count(self) -> int:
        return self._failure_count

    def _open(self) -> None:
        # Must be called with lock held.
        self._state = CircuitState.OPEN
        self._opened_at = self._clock()
        self._trial_in_flight = False

    async def _acquire(self) -> None:
        """Admit a call or raise CircuitOpenError."""
        async with self._lock:
            if self._state == CircuitState.OPEN:
                elapsed = self._clock() - (self._opened_at or 0.0)
                if elapsed < self.open_seconds:
                    raise CircuitOpenError(
                        f"{self.name}: circuit open, retry in "
                        f"{self.open_seconds - elapsed:.1f}s"
                    )
                self._state = CircuitState.HALF_OPEN
                self._trial_in_flight = False
                logger.info("%s: circuit half-open, testing recovery", self.name)

            if self._state == CircuitState.HALF_OPEN:
                if self._trial_in_flight:
                    raise CircuitOpenError(f"{self.name}: circuit half-open, trial in progress")
                self._trial_in_flight = True

    async def record_success(self) -> None:
        async with self._lock:
            if self._state == CircuitState.HALF_OPEN:
                self._state = CircuitState.CLOSED
                self._opened_at = None
                self._trial_in_flight = False
                logger.info("%s: circuit closed after successful trial call", self.name)
            if self._state == CircuitState.CLOSED:
                self._failure_count = 0

    async def record_failure(self) -> None:
        async with self._lock:
            self._failure_count += 1
            if self._state == CircuitState.HALF_OPEN:
                self._open()
                logger.warning("%s: circuit reopened after failed trial call", self.name)
            elif (
                self._state == CircuitState.CLOSED
                and self._failure_count >= self.failure_threshold
            ):
                self._open()
                logger.warning(
                    "%s: circuit opened for %ss after %s consecutive failures",
                    self.name,
                    self.open_seconds,
                    self._failure_count,
                )

    async def _release_trial(self) -> None:
        """Free the half-open slot after an outcome that is neither success nor failure."""
        async with self._lock:
            self._trial_in_flight = False

    async def call(self, func: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        """Run `func` through the breaker.

        Raises:
            CircuitOpenError: If the circuit is not admitting calls.
            Exception: Whatever `func` raised.
        """
        await self._acquire()
        try:
            result = await func(*args, **kwargs)
        except BaseException as exc:
            if self._is_failure(exc):
                await self.record_failure()
            else:
                await self._release_trial()
            raise
        await self.record_success()
        return result
