"""Construction of the billing provider client for the configured mode."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, assert_never

from tiersync.adapters.simulated import SimulatedBillingClient
from tiersync.adapters.stripe import StripeBillingClient
from tiersync.config import BillingMode, MissingConfigurationError

if TYPE_CHECKING:
    from tiersync.config import BillingConfig
    from tiersync.domain.ports.billing import BillingProviderClient

log = getLogger(__name__)


def build_billing_client(config: BillingConfig) -> BillingProviderClient:
    match config.mode:
        case BillingMode.LIVE:
            if config.stripe is None:
                raise MissingConfigurationError("STRIPE_SECRET_KEY")
            log.info(
                "Using Stripe billing client (%s mode)",
                "live" if config.stripe.livemode else "test",
            )
            return StripeBillingClient(config=config.stripe)
        case BillingMode.SIMULATED:
            log.info("Using simulated billing client")
            return SimulatedBillingClient()
        case _:
            assert_never(config.mode)
