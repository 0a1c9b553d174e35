"""Tests for the amount rule."""

from app.payments.rules.amount import check_amount


class TestCheckAmount:
    def test_minimum_amount_passes(self):
        assert check_amount(1) == []

    def test_typical_amount_passes(self):
        assert check_amount(1000) == []

    def test_very_large_amount_passes(self):
        assert check_amount(2_000_000_000) == []

    def test_zero_rejected(self):
        assert check_amount(0) == ["Amount must be at least 1 minor currency unit"]

    def test_negative_rejected(self):
        """Negative amounts get the same single message as zero."""
        assert check_amount(-100) == ["Amount must be at least 1 minor currency unit"]
