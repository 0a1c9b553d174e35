"""Tests for the full request validator."""

from datetime import date, datetime, timezone

import pytest

from app.payments.validator import validate
from tests.conftest import NEXT_YEAR, make_request


class TestValidate:
    def test_valid_request(self):
        outcome = validate(make_request())
        assert outcome.is_valid
        assert outcome.errors == []

    def test_lowercase_currency_valid(self):
        assert validate(make_request(currency="usd")).is_valid

    def test_all_violations_collected_in_rule_order(self):
        req = make_request(
            card_number="12ab",
            expiry_month=13,
            expiry_year=NEXT_YEAR,
            currency="JPY",
            amount=0,
            cvv="1",
        )
        outcome = validate(req)
        assert not outcome.is_valid
        assert outcome.errors == [
            "Card number must be between 14 and 19 characters long",
            "Card number must only contain numeric characters",
            "Expiry month must be between 1 and 12",
            "Currency must be one of: GBP, EUR, USD",
            "Amount must be at least 1 minor currency unit",
            "CVV must be between 3 and 4 characters long",
        ]

    def test_missing_strings_reported_as_required(self):
        req = make_request(card_number="", currency="", cvv="")
        outcome = validate(req)
        assert outcome.errors == [
            "Card number is required",
            "Currency is required",
            "CVV is required",
        ]

    def test_idempotent(self):
        req = make_request(card_number="123", amount=-5)
        assert validate(req) == validate(req)

    def test_current_month_is_valid(self):
        now = datetime.now(timezone.utc)
        req = make_request(expiry_month=now.month, expiry_year=now.year)
        assert validate(req).is_valid

    @pytest.mark.parametrize("month", [1, 7, 12])
    def test_past_year_always_fails(self, month):
        req = make_request(expiry_month=month, expiry_year=datetime.now(timezone.utc).year - 1)
        outcome = validate(req)
        assert "Expiry year must be in the future" in outcome.errors

    def test_today_can_be_pinned(self):
        req = make_request(expiry_month=3, expiry_year=2030)
        assert validate(req, today=date(2030, 3, 31)).is_valid
        assert validate(req, today=date(2030, 4, 1)).errors == ["Expiry date must be in the future"]

    @pytest.mark.parametrize("card_number", ["4" * 13, "4" * 20, "4111x11111111111"])
    def test_bad_card_numbers_fail(self, card_number):
        assert not validate(make_request(card_number=card_number)).is_valid

    @pytest.mark.parametrize("length", [14, 16, 19])
    def test_good_card_numbers_pass(self, length):
        assert validate(make_request(card_number="5" * length)).is_valid

    def test_valid_flag_never_mixed_with_errors(self):
        for req in (make_request(), make_request(amount=0)):
            outcome = validate(req)
            assert outcome.is_valid == (outcome.errors == [])
