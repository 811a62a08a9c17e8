"""Billing provider configuration and execution-mode selection."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import Final

from .env import optional_env_var
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import ResilienceConfig, RetryPolicy

log = getLogger(__name__)

STRIPE_API_BASE_URL: Final[str] = "https://api.stripe.com/v1/"
STRIPE_API_VERSION: Final[str] = "2025-06-30.basil"
STRIPE_TIMEOUT_SECONDS: Final[float] = 30.0
DEFAULT_CURRENCY: Final[str] = "eur"

_KEY_SHAPE = re.compile(r"^(?:sk|rk)_(?:test|live)_[A-Za-z0-9]+$")
_KEY_PREFIXES: Final[tuple[str, ...]] = ("sk_test_", "sk_live_", "rk_test_", "rk_live_")


class BillingMode(StrEnum):
    LIVE = "live"
    SIMULATED = "simulated"


class RequestedBillingMode(StrEnum):
    AUTO = "auto"
    LIVE = "live"
    SIMULATED = "simulated"


@dataclass(frozen=True, slots=True)
class StripeConfig:
    """Holds Stripe API credentials and transport settings."""

    secret_key: str = field(repr=False)
    resilience: ResilienceConfig
    api_version: str = STRIPE_API_VERSION

    @property
    def livemode(self) -> bool:
        return "_live_" in self.secret_key


@dataclass(frozen=True, slots=True)
class BillingConfig:
    mode: BillingMode
    currency: str = DEFAULT_CURRENCY
    stripe: StripeConfig | None = None


def _parse_requested_mode(raw: str | None) -> RequestedBillingMode:
    if raw is None:
        return RequestedBillingMode.AUTO
    try:
        return RequestedBillingMode(raw.lower())
    except ValueError:
        allowed = ", ".join(mode.value for mode in RequestedBillingMode)
        raise ConfigurationError(f"BILLING_MODE must be one of {allowed}, got {raw!r}") from None


def select_billing_mode(
    secret_key: str | None,
    *,
    requested: RequestedBillingMode = RequestedBillingMode.AUTO,
) -> BillingMode:
    """Decide between the live and simulated billing client.

    A credential carrying a Stripe key prefix must be well-formed; anything else
    (absent, blank, placeholder values) falls back to simulation unless live mode
    was explicitly requested.
    """

    if requested is RequestedBillingMode.SIMULATED:
        return BillingMode.SIMULATED

    if secret_key is None or not secret_key.strip():
        if requested is RequestedBillingMode.LIVE:
            raise MissingConfigurationError("STRIPE_SECRET_KEY")
        return BillingMode.SIMULATED

    key = secret_key.strip()
    if _KEY_SHAPE.fullmatch(key):
        return BillingMode.LIVE
    if key.startswith(_KEY_PREFIXES):
        raise ConfigurationError("STRIPE_SECRET_KEY is malformed")
    if requested is RequestedBillingMode.LIVE:
        raise ConfigurationError("STRIPE_SECRET_KEY is not a Stripe secret or restricted key")

    log.info("STRIPE_SECRET_KEY is a placeholder, using the simulated billing client")
    return BillingMode.SIMULATED


def default_stripe_resilience(base_url: str = STRIPE_API_BASE_URL) -> ResilienceConfig:
    return ResilienceConfig(
        name="stripe",
        base_url=base_url,
        timeout_seconds=STRIPE_TIMEOUT_SECONDS,
        retry=RetryPolicy(total=2),
    )


def get_billing_currency() -> str:
    return (optional_env_var("BILLING_CURRENCY") or DEFAULT_CURRENCY).lower()


def get_billing_config(*, resilience: ResilienceConfig | None = None) -> BillingConfig:
    secret_key = optional_env_var("STRIPE_SECRET_KEY")
    requested = _parse_requested_mode(optional_env_var("BILLING_MODE"))
    currency = get_billing_currency()

    mode = select_billing_mode(secret_key, requested=requested)
    if mode is BillingMode.SIMULATED or secret_key is None:
        return BillingConfig(mode=BillingMode.SIMULATED, currency=currency)

    base_url = optional_env_var("STRIPE_API_BASE_URL") or STRIPE_API_BASE_URL
    stripe = StripeConfig(
        secret_key=secret_key,
        resilience=resilience or default_stripe_resilience(base_url),
    )
    return BillingConfig(mode=BillingMode.LIVE, currency=currency, stripe=stripe)
