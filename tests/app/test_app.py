from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tiersync import app as app_module
from tiersync.adapters.simulated import SimulatedBillingClient
from tiersync.adapters.stripe import StripeBillingClient
from tiersync.app import (
    build_catalog_synchronizer,
    default_billing_client,
    get_pricing_catalog_status,
    plan_pricing_catalog,
    sync_pricing_catalog,
    sync_pricing_tier,
)
from tiersync.config import ConfigurationError
from tiersync.domain.model import SyncAction, TierAction
from tests.helpers.pricing_tiers import (
    FakeCatalogUnitOfWork,
    FakePricingTierRepository,
    RecordingBillingClient,
    make_tier,
)

if TYPE_CHECKING:
    from collections.abc import Callable


def _factory(repository: FakePricingTierRepository) -> Callable[[], FakeCatalogUnitOfWork]:
    return lambda: FakeCatalogUnitOfWork(repository)


def test_default_billing_client_is_simulated_without_key() -> None:
    client = default_billing_client()

    assert isinstance(client, SimulatedBillingClient)
    assert default_billing_client() is client


def test_default_billing_client_is_stripe_with_valid_key(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test_abc123")

    assert isinstance(default_billing_client(), StripeBillingClient)


def test_default_billing_client_rejects_malformed_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test_not-valid")

    with pytest.raises(ConfigurationError):
        default_billing_client()


def test_synchronizer_pauses_only_for_stripe(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test_abc123")
    monkeypatch.setenv("TIER_SYNC_PAUSE_SECONDS", "0.5")
    repository = FakePricingTierRepository()

    live = build_catalog_synchronizer(unit_of_work_factory=_factory(repository))
    simulated = build_catalog_synchronizer(
        billing=SimulatedBillingClient(),
        unit_of_work_factory=_factory(repository),
    )

    assert live.pause_seconds == 0.5
    assert simulated.pause_seconds == 0.0


def test_synchronizer_uses_configured_currency(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BILLING_CURRENCY", "GBP")
    tier = make_tier()
    repository = FakePricingTierRepository([tier])
    billing = RecordingBillingClient()

    sync_pricing_catalog(billing=billing, unit_of_work_factory=_factory(repository))

    assert billing.calls[1].args["currency"] == "gbp"


def test_sync_pricing_catalog_with_injected_adapters() -> None:
    tiers = [
        make_tier("Basic", sort_order=1),
        make_tier("Legacy", active=False, product_id="p_1", price_id="pr_1", sort_order=2),
    ]
    repository = FakePricingTierRepository(tiers)

    batch = sync_pricing_catalog(
        billing=RecordingBillingClient(),
        unit_of_work_factory=_factory(repository),
    )

    assert (batch.summary.created, batch.summary.disabled) == (1, 1)


def test_sync_pricing_tier() -> None:
    tier = make_tier()
    repository = FakePricingTierRepository([tier])

    result = sync_pricing_tier(
        tier.id,
        billing=RecordingBillingClient(),
        unit_of_work_factory=_factory(repository),
    )

    assert result.action is SyncAction.CREATED


def test_plan_pricing_catalog_does_not_call_provider() -> None:
    repository = FakePricingTierRepository([make_tier()])
    billing = RecordingBillingClient()

    planned = plan_pricing_catalog(billing=billing, unit_of_work_factory=_factory(repository))

    assert [item.action for item in planned] == [TierAction.CREATE]
    assert billing.calls == []


def test_get_pricing_catalog_status() -> None:
    repository = FakePricingTierRepository([make_tier(product_id="prod_1", price_id="price_1")])

    status = get_pricing_catalog_status(
        billing=RecordingBillingClient(),
        unit_of_work_factory=_factory(repository),
    )

    assert status.summary.with_external_product == 1
    assert status.tiers[0].external_product_active is True


def test_entry_points_start_storage_when_needed(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []
    repository = FakePricingTierRepository()

    monkeypatch.setattr(app_module, "is_started", lambda: False)
    monkeypatch.setattr(app_module, "startup", lambda: calls.append("startup"))
    monkeypatch.setattr(app_module, "SqlAlchemyUnitOfWork", _factory(repository))

    batch = sync_pricing_catalog(billing=RecordingBillingClient())

    assert calls == ["startup"]
    assert batch.summary.total == 0
