"""
Payments infrastructure module.
"""

from .stripe_gateway import StripePaymentGateway

__all__ = ["StripePaymentGateway"]
