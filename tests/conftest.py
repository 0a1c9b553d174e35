"""Shared fixtures for the test suite."""

import json
from datetime import datetime, timezone

import httpx
import pytest
from fastapi.testclient import TestClient

from app.bank.circuit_breaker import CircuitBreaker
from app.bank.client import BankClient
from app.bank.resilience import ResiliencePolicy, is_transient
from app.main import app
from app.models import PaymentRequest
from app.payments.service import PaymentService
from app.storage.memory import PaymentsRepository


BANK_URL = "http://bank.test"
NEXT_YEAR = datetime.now(timezone.utc).year + 1
REQUIRED_BANK_FIELDS = ("card_number", "expiry_date", "currency", "amount", "cvv")


class BankSimulator:
    """MockTransport handler that behaves like the bank simulator.

    Card numbers ending in 0 get a 503, odd last digits are authorized,
    even ones declined. Requests with missing fields get a 400.
    """

    def __init__(self) -> None:
        self.calls: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        body = json.loads(request.content)

        if any(not body.get(field) for field in REQUIRED_BANK_FIELDS):
            return httpx.Response(
                400,
                json={"errorMessage": "Not all required properties were sent in the request"},
            )

        last_digit = body["card_number"][-1]
        if last_digit == "0":
            return httpx.Response(503)
        if int(last_digit) % 2 == 1:
            return httpx.Response(
                200,
                json={"authorized": True, "authorization_code": "0bb07405-6d44-4b50-a14f-7ae0beff13ad"},
            )
        return httpx.Response(200, json={"authorized": False, "authorization_code": ""})

    @property
    def bodies(self) -> list[dict]:
        return [json.loads(call.content) for call in self.calls]


class RecordingHandler:
    """MockTransport handler that always answers the same way.

    A fresh response (or exception) is built per call so retries never
    share a consumed stream.
    """

    def __init__(self, status_code=200, exc_type=None, **response_kwargs) -> None:
        self.status_code = status_code
        self.exc_type = exc_type
        self.response_kwargs = response_kwargs
        self.calls: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if self.exc_type is not None:
            raise self.exc_type("simulated failure", request=request)
        return httpx.Response(self.status_code, **self.response_kwargs)


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def breaker(clock):
    return CircuitBreaker(
        failure_threshold=5,
        open_seconds=30.0,
        is_failure=is_transient,
        clock=clock,
    )


@pytest.fixture
def policy(breaker, sleeps):
    async def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)

    return ResiliencePolicy(breaker=breaker, sleep=fake_sleep)


@pytest.fixture
def bank_simulator():
    return BankSimulator()


@pytest.fixture
def bank_client(bank_simulator, policy):
    return make_bank_client(bank_simulator, policy)


@pytest.fixture
def repository():
    return PaymentsRepository()


@pytest.fixture
def service(bank_client, repository):
    return PaymentService(bank_client, repository)


@pytest.fixture
def client(service):
    with TestClient(app) as c:
        app.state.payment_service = service
        yield c


def make_bank_client(handler, policy) -> BankClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return BankClient(BANK_URL, http_client=http_client, policy=policy)


def make_request(
    card_number="1234567890123457",
    expiry_month=12,
    expiry_year=NEXT_YEAR,
    currency="GBP",
    amount=1000,
    cvv="123",
) -> PaymentRequest:
    return PaymentRequest(
        card_number=card_number,
        expiry_month=expiry_month,
        expiry_year=expiry_year,
        currency=currency,
        amount=amount,
        cvv=cvv,
    )


def payment_payload(**overrides) -> dict:
    payload = make_request().model_dump()
    payload.update(overrides)
    return payload
