"""
Unit tests for FeeService.
"""

import pytest
from app.domain.models.base import ValidationError
from app.domain.services.fee_service import FeeService, MINIMUM_PAYMENT_CENTS


class TestFeeService:
    """Test cases for fee calculations."""

    def setup_method(self):
        self.service = FeeService(platform_fee_percentage=10.0)

    def test_to_cents(self):
        assert FeeService.to_cents(29.99) == 2999
        assert FeeService.to_cents(100) == 10000

    def test_platform_fee(self):
        assert self.service.platform_fee(10000) == 1000

    def test_stripe_fee(self):
        # 2.9% of $100 plus $0.30
        assert FeeService.stripe_fee(10000) == 320

    def test_breakdown(self):
        breakdown = self.service.breakdown(10000)
        assert breakdown.amount == 10000
        assert breakdown.platform_fee == 1000
        assert breakdown.stripe_fee == 320
        assert breakdown.net_amount == 8680

    def test_minimum_amount(self):
        self.service.validate_amount(MINIMUM_PAYMENT_CENTS)
        with pytest.raises(ValidationError):
            self.service.breakdown(MINIMUM_PAYMENT_CENTS - 1)

    def test_custom_platform_percentage(self):
        assert FeeService(platform_fee_percentage=5).platform_fee(10000) == 500
