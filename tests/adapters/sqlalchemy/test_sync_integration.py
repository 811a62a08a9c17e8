"""End-to-end reconciliation against SQLite with the simulated provider."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from tiersync.adapters.simulated import SimulatedBillingClient
from tiersync.app import build_catalog_synchronizer
from tiersync.domain.model import SyncAction
from tests.helpers.pricing_tiers import make_tier

if TYPE_CHECKING:
    from collections.abc import Callable

    from tiersync.adapters.sqlalchemy import SqlAlchemyUnitOfWork


def test_full_pass_persists_ids_and_reruns_as_updates(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    active = make_tier("Basic", sort_order=1)
    retired = make_tier("Old", active=False, product_id="p_1", price_id="pr_1", sort_order=2)
    draft = make_tier("Draft", active=False, sort_order=3)
    with sqlite_unit_of_work() as uow:
        for tier in (active, retired, draft):
            uow.repositories.pricing_tiers.add(tier)
        uow.commit()

    synchronizer = build_catalog_synchronizer(
        billing=SimulatedBillingClient(),
        unit_of_work_factory=sqlite_unit_of_work,
    )

    first = synchronizer.sync_all()
    second = synchronizer.sync_all()

    assert [result.action for result in first.results] == [
        SyncAction.CREATED,
        SyncAction.DISABLED,
        SyncAction.SKIPPED,
    ]
    assert [result.action for result in second.results] == [
        SyncAction.UPDATED,
        SyncAction.DISABLED,
        SyncAction.SKIPPED,
    ]
    assert synchronizer.pause_seconds == 0.0

    with sqlite_unit_of_work() as uow:
        stored = uow.repositories.pricing_tiers.get_by_id(active.id)
    assert stored.external_product_id == first.results[0].external_product_id
    assert stored.external_price_id is not None
    assert stored.external_price_id.startswith("price_sim_")


def test_commit_failure_only_fails_that_tier(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    first = make_tier("First", sort_order=1)
    second = make_tier("Second", sort_order=2)
    with sqlite_unit_of_work() as uow:
        uow.repositories.pricing_tiers.add(first)
        uow.repositories.pricing_tiers.add(second)
        uow.commit()

    original_commit = Session.commit
    attempts: list[int] = []

    def flaky_commit(session: Session) -> None:
        attempts.append(1)
        if len(attempts) == 1:
            raise OperationalError("COMMIT", {}, Exception("database is locked"))
        original_commit(session)

    monkeypatch.setattr(Session, "commit", flaky_commit)
    synchronizer = build_catalog_synchronizer(
        billing=SimulatedBillingClient(),
        unit_of_work_factory=sqlite_unit_of_work,
    )

    batch = synchronizer.sync_all()

    assert len(batch.results) == 2
    assert batch.results[0].action is SyncAction.ERROR
    assert batch.results[0].error is not None
    assert "database is locked" in batch.results[0].error
    assert batch.results[1].action is SyncAction.CREATED
    assert batch.summary.errors == 1

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.pricing_tiers.get_by_id(first.id).external_product_id is None
