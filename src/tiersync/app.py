"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache
from logging import getLogger
from typing import TYPE_CHECKING

from tiersync.adapters.billing import build_billing_client
from tiersync.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, is_started, startup
from tiersync.adapters.stripe import StripeBillingClient
from tiersync.config import get_billing_config, get_billing_currency, get_sync_config
from tiersync.domain.catalog_status import get_catalog_status
from tiersync.domain.catalog_sync import CatalogSynchronizer
from tiersync.domain.reconciliation import TierReconciler

if TYPE_CHECKING:
    from uuid import UUID

    from tiersync.domain.catalog_status import CatalogStatus
    from tiersync.domain.catalog_sync import Sleeper
    from tiersync.domain.ports.billing import BillingProviderClient
    from tiersync.domain.ports.unit_of_work import CatalogUnitOfWork
    from tiersync.domain.reconciliation import BatchSyncResult, PlannedAction, SyncResult

UnitOfWorkFactory = Callable[[], "CatalogUnitOfWork"]

log = getLogger(__name__)


@lru_cache(maxsize=1)
def default_billing_client() -> BillingProviderClient:
    """Resolve the billing client for this process from the environment."""

    return build_billing_client(get_billing_config())


def _default_unit_of_work_factory() -> UnitOfWorkFactory:
    if not is_started():
        startup()
    return SqlAlchemyUnitOfWork


def build_catalog_synchronizer(
    *,
    billing: BillingProviderClient | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    currency: str | None = None,
    pause_seconds: float | None = None,
    sleep: Sleeper | None = None,
) -> CatalogSynchronizer:
    """Wire the reconciler and batch orchestrator with the configured adapters.

    Anything not passed explicitly is resolved from the environment. The pause
    between tiers only applies when talking to Stripe.
    """

    effective_billing = billing or default_billing_client()
    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    if pause_seconds is None:
        pause_seconds = (
            get_sync_config().tier_pause_seconds
            if isinstance(effective_billing, StripeBillingClient)
            else 0.0
        )

    reconciler = TierReconciler(
        billing=effective_billing,
        unit_of_work_factory=effective_uow,
        currency=currency or get_billing_currency(),
    )
    synchronizer = CatalogSynchronizer(
        reconciler=reconciler,
        unit_of_work_factory=effective_uow,
        pause_seconds=pause_seconds,
    )
    if sleep is not None:
        synchronizer.sleep = sleep
    return synchronizer


def sync_pricing_catalog(
    *,
    billing: BillingProviderClient | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> BatchSyncResult:
    """Reconcile every pricing tier with the billing provider."""

    synchronizer = build_catalog_synchronizer(
        billing=billing,
        unit_of_work_factory=unit_of_work_factory,
    )
    return synchronizer.sync_all()


def sync_pricing_tier(
    tier_id: UUID,
    *,
    billing: BillingProviderClient | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> SyncResult:
    """Reconcile a single pricing tier; raises ``TierNotFoundError`` for an unknown id."""

    synchronizer = build_catalog_synchronizer(
        billing=billing,
        unit_of_work_factory=unit_of_work_factory,
    )
    return synchronizer.sync_tier_id(tier_id)


def plan_pricing_catalog(
    *,
    billing: BillingProviderClient | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[PlannedAction]:
    """Classify every tier without calling the provider."""

    synchronizer = build_catalog_synchronizer(
        billing=billing,
        unit_of_work_factory=unit_of_work_factory,
        pause_seconds=0.0,
    )
    return synchronizer.plan()


def get_pricing_catalog_status(
    *,
    billing: BillingProviderClient | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> CatalogStatus:
    """Cross-reference the local catalog with the billing provider."""

    return get_catalog_status(
        billing=billing or default_billing_client(),
        unit_of_work_factory=unit_of_work_factory or _default_unit_of_work_factory(),
    )
