"""Public interface for the Stripe adapter."""

from __future__ import annotations

from .client import StripeAPIError, StripeBillingClient
from .schema import ErrorResponse, PricePayload, ProductPayload

__all__ = [
    "ErrorResponse",
    "PricePayload",
    "ProductPayload",
    "StripeAPIError",
    "StripeBillingClient",
]
