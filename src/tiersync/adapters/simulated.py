"""In-process stand-in for the billing provider.

Used when no usable provider credential is configured. Every call succeeds and
returns freshly generated ids; nothing is remembered between calls.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING
from uuid import uuid4

from tiersync.domain.ports.billing import ProductStatus

if TYPE_CHECKING:
    from tiersync.domain.ports.billing import BillingProviderClient

log = getLogger(__name__)


def _random_suffix() -> str:
    return uuid4().hex


@dataclass(slots=True)
class SimulatedBillingClient:
    id_suffix: Callable[[], str] = field(default=_random_suffix)

    def create_product(
        self,
        *,
        name: str,
        description: str,
        metadata: Mapping[str, str],
    ) -> str:
        product_id = f"prod_sim_{self.id_suffix()}"
        log.info(
            "[simulated] Created product %s for %s (metadata=%s)",
            product_id,
            name,
            dict(metadata),
        )
        return product_id

    def create_price(
        self,
        *,
        product_id: str,
        unit_amount: int,
        currency: str,
        metadata: Mapping[str, str],
    ) -> str:
        price_id = f"price_sim_{self.id_suffix()}"
        log.info(
            "[simulated] Created price %s for %s: %s %s",
            price_id,
            product_id,
            unit_amount,
            currency,
        )
        return price_id

    def update_product(
        self,
        product_id: str,
        *,
        name: str,
        description: str,
        metadata: Mapping[str, str],
    ) -> None:
        log.info("[simulated] Updated product %s (%s)", product_id, name)

    def archive_product(self, product_id: str, *, metadata: Mapping[str, str]) -> None:
        log.info("[simulated] Archived product %s", product_id)

    def retrieve_product(self, product_id: str) -> ProductStatus:
        return ProductStatus(product_id=product_id, active=True)


if TYPE_CHECKING:
    _client_check: BillingProviderClient = SimulatedBillingClient()
