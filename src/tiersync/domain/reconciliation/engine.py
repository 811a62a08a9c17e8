"""Single-tier reconciliation between the local catalog and the billing provider.

The reconciler holds whichever billing client it was built with and never
inspects which one it is, so the decision logic runs identically against the
live provider, the simulated client or a test double.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, assert_never

from tiersync.config.billing import DEFAULT_CURRENCY
from tiersync.domain.clock import Clock, isoformat_utc, utcnow
from tiersync.domain.model import SyncAction, TierAction
from tiersync.domain.ports.billing import ProviderError
from tiersync.domain.ports.persistence import RepositoryError

from .plan import plan_action
from .results import SyncResult

if TYPE_CHECKING:
    from tiersync.domain.model import PricingTier
    from tiersync.domain.ports.billing import BillingProviderClient
    from tiersync.domain.ports.persistence import PricingTierRepository
    from tiersync.domain.ports.unit_of_work import CatalogUnitOfWork

UnitOfWorkFactory = Callable[[], "CatalogUnitOfWork"]

log = getLogger(__name__)


@dataclass(slots=True)
class TierReconciler:
    """Decide and execute the action that brings one tier in line with the provider."""

    billing: BillingProviderClient
    unit_of_work_factory: UnitOfWorkFactory
    currency: str = DEFAULT_CURRENCY
    clock: Clock = field(default=utcnow)

    def sync_one(self, tier: PricingTier) -> SyncResult:
        """Reconcile ``tier`` and report the outcome.

        The tier is re-read from the repository so the decision is made on
        persisted state. Provider and repository failures are turned into an
        ``error`` result instead of being raised.
        """

        try:
            with self.unit_of_work_factory() as uow:
                repository = uow.repositories.pricing_tiers
                current = repository.get_by_id(tier.id)
                result = self._execute(current, repository)
                uow.commit()
        except (ProviderError, RepositoryError) as exc:
            log.error("Billing sync failed for tier %s (%s): %s", tier.name, tier.id, exc)
            return SyncResult.failure(tier, exc)
        return result

    def _execute(self, tier: PricingTier, repository: PricingTierRepository) -> SyncResult:
        action = plan_action(tier)
        log.debug("Tier %s (%s) classified as %s", tier.name, tier.id, action)
        match action:
            case TierAction.CREATE:
                return self._create(tier, repository)
            case TierAction.UPDATE:
                return self._update(tier)
            case TierAction.DISABLE:
                return self._disable(tier)
            case TierAction.SKIP:
                return self._skip(tier)
            case _:
                assert_never(action)

    def _create(self, tier: PricingTier, repository: PricingTierRepository) -> SyncResult:
        tier_ref = str(tier.id)
        product_id = self.billing.create_product(
            name=tier.name,
            description=tier.description,
            metadata={"tierId": tier_ref, "serviceCategory": tier.service_category},
        )
        price_id = self.billing.create_price(
            product_id=product_id,
            unit_amount=tier.price_minor_units,
            currency=self.currency,
            metadata={"tierId": tier_ref},
        )
        repository.update_by_id(
            tier.id,
            external_product_id=product_id,
            external_price_id=price_id,
        )
        message = f"Created product and price for {tier.name}"
        log.info("%s: product=%s, price=%s", message, product_id, price_id)
        return SyncResult(
            success=True,
            tier_id=tier.id,
            action=SyncAction.CREATED,
            message=message,
            external_product_id=product_id,
            external_price_id=price_id,
        )

    def _update(self, tier: PricingTier) -> SyncResult:
        product_id = tier.external_product_id
        assert product_id is not None
        self.billing.update_product(
            product_id,
            name=tier.name,
            description=tier.description,
            metadata={
                "tierId": str(tier.id),
                "serviceCategory": tier.service_category,
                "lastUpdated": isoformat_utc(self.clock()),
            },
        )
        message = f"Updated product for {tier.name}"
        log.info("%s: product=%s", message, product_id)
        return SyncResult(
            success=True,
            tier_id=tier.id,
            action=SyncAction.UPDATED,
            message=message,
            external_product_id=product_id,
            external_price_id=tier.external_price_id,
        )

    def _disable(self, tier: PricingTier) -> SyncResult:
        # prices cannot be deactivated on their own, archiving the product hides both
        if tier.external_product_id:
            self.billing.archive_product(
                tier.external_product_id,
                metadata={
                    "tierId": str(tier.id),
                    "deactivatedAt": isoformat_utc(self.clock()),
                },
            )
        message = f"Archived product for {tier.name}"
        log.warning("%s: product=%s", message, tier.external_product_id)
        return SyncResult(
            success=True,
            tier_id=tier.id,
            action=SyncAction.DISABLED,
            message=message,
            external_product_id=tier.external_product_id,
            external_price_id=tier.external_price_id,
        )

    def _skip(self, tier: PricingTier) -> SyncResult:
        message = f"No billing action needed for {tier.name}"
        log.debug(message)
        return SyncResult(
            success=True,
            tier_id=tier.id,
            action=SyncAction.SKIPPED,
            message=message,
            external_product_id=tier.external_product_id,
            external_price_id=tier.external_price_id,
        )
