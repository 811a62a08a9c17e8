"""Read-only cross reference between the local catalog and the billing provider."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from tiersync.domain.ports.billing import ProviderError

if TYPE_CHECKING:
    from tiersync.domain.model import PricingTier
    from tiersync.domain.ports.billing import BillingProviderClient
    from tiersync.domain.reconciliation import UnitOfWorkFactory

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TierStatus:
    tier: PricingTier
    external_product_active: bool | None = None
    external_price_active: bool | None = None


@dataclass(slots=True)
class CatalogStatusSummary:
    total: int = 0
    with_external_product: int = 0
    with_external_price: int = 0
    active_only: int = 0


@dataclass(slots=True)
class CatalogStatus:
    tiers: list[TierStatus] = field(default_factory=list[TierStatus])
    summary: CatalogStatusSummary = field(default_factory=CatalogStatusSummary)


def get_catalog_status(
    *,
    billing: BillingProviderClient,
    unit_of_work_factory: UnitOfWorkFactory,
) -> CatalogStatus:
    """Report every tier together with the state of its provider product.

    Issues one product lookup per tier that has a product id. A failed lookup
    marks that product as inactive instead of failing the report.
    """

    with unit_of_work_factory() as uow:
        tiers = uow.repositories.pricing_tiers.list_all()

    status = CatalogStatus()
    status.summary.total = len(tiers)
    for tier in tiers:
        product_active: bool | None = None
        price_active: bool | None = None

        if tier.active:
            status.summary.active_only += 1

        if tier.external_product_id:
            status.summary.with_external_product += 1
            product_active = _product_active(billing, tier.external_product_id)

        if tier.external_price_id:
            status.summary.with_external_price += 1
            # prices are never deleted by the provider
            price_active = True

        status.tiers.append(
            TierStatus(
                tier=tier,
                external_product_active=product_active,
                external_price_active=price_active,
            )
        )
    return status


def _product_active(billing: BillingProviderClient, product_id: str) -> bool:
    try:
        return billing.retrieve_product(product_id).active
    except ProviderError as exc:
        log.warning("Could not look up product %s: %s", product_id, exc)
        return False
