from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tiersync.domain.catalog_sync import CatalogSynchronizer
from tiersync.domain.model import SyncAction, TierAction
from tiersync.domain.ports.persistence import RepositoryError, TierNotFoundError
from tiersync.domain.reconciliation import TierReconciler
from tests.helpers.pricing_tiers import (
    FailingBillingClient,
    FakeCatalogUnitOfWork,
    FakePricingTierRepository,
    RecordingBillingClient,
    fixed_clock,
    make_tier,
)

if TYPE_CHECKING:
    from tiersync.domain.model import PricingTier


def _synchronizer(
    tiers: list[PricingTier],
    billing: RecordingBillingClient,
    *,
    pause_seconds: float = 0.0,
    sleeps: list[float] | None = None,
) -> tuple[CatalogSynchronizer, FakePricingTierRepository]:
    repository = FakePricingTierRepository(tiers)

    def factory() -> FakeCatalogUnitOfWork:
        return FakeCatalogUnitOfWork(repository)

    recorded = sleeps if sleeps is not None else []
    synchronizer = CatalogSynchronizer(
        reconciler=TierReconciler(billing=billing, unit_of_work_factory=factory, clock=fixed_clock),
        unit_of_work_factory=factory,
        pause_seconds=pause_seconds,
        sleep=recorded.append,
    )
    return synchronizer, repository


def test_sync_all_summarises_create_and_disable() -> None:
    tiers = [
        make_tier("Basic", sort_order=1),
        make_tier("Legacy", active=False, product_id="p_1", price_id="pr_1", sort_order=2),
    ]
    synchronizer, _ = _synchronizer(tiers, RecordingBillingClient())

    batch = synchronizer.sync_all()

    summary = batch.summary
    assert (
        summary.total,
        summary.created,
        summary.updated,
        summary.disabled,
        summary.skipped,
        summary.errors,
    ) == (2, 1, 0, 1, 0, 0)
    assert batch.success
    assert [result.action for result in batch.results] == [
        SyncAction.CREATED,
        SyncAction.DISABLED,
    ]


def test_counters_add_up_to_total() -> None:
    tiers = [
        make_tier("A", sort_order=1),
        make_tier("B", product_id="prod_b", sort_order=2),
        make_tier("C", active=False, sort_order=3),
        make_tier("D", active=False, product_id="prod_d", price_id="price_d", sort_order=4),
        make_tier("E", product_id="prod_e", sort_order=5),
    ]
    billing = FailingBillingClient(failing_products={"prod_e"})
    synchronizer, _ = _synchronizer(tiers, billing)

    summary = synchronizer.sync_all().summary

    assert summary.total == 5
    assert (
        summary.created + summary.updated + summary.disabled + summary.skipped + summary.errors
        == summary.total
    )
    assert summary.errors == 1
    assert not summary.success


def test_failing_tier_does_not_stop_the_batch() -> None:
    tiers = [
        make_tier("First", sort_order=1),
        make_tier("Broken", sort_order=2),
        make_tier("Third", sort_order=3),
    ]
    billing = FailingBillingClient(failing_names={"Broken"})
    synchronizer, repository = _synchronizer(tiers, billing)

    batch = synchronizer.sync_all()

    assert len(batch.results) == 3
    assert [result.success for result in batch.results] == [True, False, True]
    assert batch.results[1].action is SyncAction.ERROR
    assert batch.results[2].action is SyncAction.CREATED
    assert repository.stored(tiers[2].id).external_product_id is not None
    assert not batch.success


def test_pause_only_between_tiers() -> None:
    tiers = [make_tier(str(index), sort_order=index) for index in range(3)]
    sleeps: list[float] = []
    synchronizer, _ = _synchronizer(
        tiers, RecordingBillingClient(), pause_seconds=0.2, sleeps=sleeps
    )

    synchronizer.sync_all()

    assert sleeps == [0.2, 0.2]


def test_no_pause_when_disabled() -> None:
    tiers = [make_tier(str(index), sort_order=index) for index in range(3)]
    sleeps: list[float] = []
    synchronizer, _ = _synchronizer(tiers, RecordingBillingClient(), sleeps=sleeps)

    synchronizer.sync_all()

    assert sleeps == []


def test_rerun_only_updates() -> None:
    tiers = [make_tier("A", sort_order=1), make_tier("B", sort_order=2)]
    billing = RecordingBillingClient()
    synchronizer, _ = _synchronizer(tiers, billing)

    first = synchronizer.sync_all().summary
    second = synchronizer.sync_all().summary

    assert (first.created, first.updated) == (2, 0)
    assert (second.created, second.updated) == (0, 2)
    assert billing.methods().count("create_product") == 2


def test_empty_catalog() -> None:
    synchronizer, _ = _synchronizer([], RecordingBillingClient())

    batch = synchronizer.sync_all()

    assert batch.results == []
    assert batch.summary.total == 0
    assert batch.success


def test_list_failure_propagates() -> None:
    class BrokenRepository(FakePricingTierRepository):
        def list_all(self) -> list[PricingTier]:
            raise RepositoryError("database unavailable")

    repository = BrokenRepository()

    def factory() -> FakeCatalogUnitOfWork:
        return FakeCatalogUnitOfWork(repository)

    synchronizer = CatalogSynchronizer(
        reconciler=TierReconciler(billing=RecordingBillingClient(), unit_of_work_factory=factory),
        unit_of_work_factory=factory,
    )

    with pytest.raises(RepositoryError):
        synchronizer.sync_all()


def test_plan_does_not_touch_provider_or_store() -> None:
    tiers = [
        make_tier("New", sort_order=1),
        make_tier("Old", active=False, product_id="p", price_id="pr", sort_order=2),
    ]
    billing = RecordingBillingClient()
    synchronizer, repository = _synchronizer(tiers, billing)

    planned = synchronizer.plan()

    assert [item.action for item in planned] == [TierAction.CREATE, TierAction.DISABLE]
    assert billing.calls == []
    assert repository.updates == []


def test_sync_tier_id() -> None:
    tier = make_tier()
    synchronizer, repository = _synchronizer([tier], RecordingBillingClient())

    result = synchronizer.sync_tier_id(tier.id)

    assert result.action is SyncAction.CREATED
    assert repository.stored(tier.id).external_price_id == result.external_price_id


def test_sync_tier_id_unknown() -> None:
    synchronizer, _ = _synchronizer([], RecordingBillingClient())

    with pytest.raises(TierNotFoundError):
        synchronizer.sync_tier_id(make_tier().id)
