"""Fee service for payment amount calculations.
All amounts are integer cents.
"""

from dataclasses import dataclass

from app.domain.models.base import ValidationError


MINIMUM_PAYMENT_CENTS = 100
STRIPE_PERCENTAGE_FEE = 0.029
STRIPE_FIXED_FEE_CENTS = 30


@dataclass(frozen=True)
class FeeBreakdown:
    amount: int
    platform_fee: int
    stripe_fee: int

    @property
    def net_amount(self) -> int:
        return self.amount - self.platform_fee - self.stripe_fee


class FeeService:
    """
    Domain service for platform and processor fees.
    """

    def __init__(self, platform_fee_percentage: float = 10.0):
        self.platform_fee_percentage = platform_fee_percentage

    @staticmethod
    def to_cents(amount: float) -> int:
        """Convert a decimal currency amount to cents."""
        return int(round(amount * 100))

    def platform_fee(self, amount: int) -> int:
        return int(round(amount * (self.platform_fee_percentage / 100)))

    @staticmethod
    def stripe_fee(amount: int) -> int:
        # Card pricing: 2.9% + $0.30
        return int(round(amount * STRIPE_PERCENTAGE_FEE + STRIPE_FIXED_FEE_CENTS))

    def validate_amount(self, amount: int) -> None:
        if amount < MINIMUM_PAYMENT_CENTS:
            raise ValidationError("Minimum payment amount is $1.00", "amount")

    def breakdown(self, amount: int) -> FeeBreakdown:
        """Validate a contract payment amount and split it into fees."""
        self.validate_amount(amount)
        return FeeBreakdown(
            amount=amount,
            platform_fee=self.platform_fee(amount),
            stripe_fee=self.stripe_fee(amount),
        )
