"""Application service reconciling the whole pricing catalog."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from tiersync.domain.reconciliation import BatchSyncResult, SyncSummary, plan_tiers

if TYPE_CHECKING:
    from uuid import UUID

    from tiersync.domain.model import PricingTier
    from tiersync.domain.reconciliation import (
        PlannedAction,
        SyncResult,
        TierReconciler,
        UnitOfWorkFactory,
    )

Sleeper = Callable[[float], None]

log = getLogger(__name__)


@dataclass(slots=True)
class CatalogSynchronizer:
    """Run the reconciler over every pricing tier, one at a time.

    A failing tier is recorded and the pass continues; there is no rollback.
    Running the pass again re-derives every decision from persisted state and
    only acts on what still needs it.
    """

    reconciler: TierReconciler
    unit_of_work_factory: UnitOfWorkFactory
    pause_seconds: float = 0.0
    sleep: Sleeper = field(default=time.sleep)

    def list_tiers(self) -> list[PricingTier]:
        with self.unit_of_work_factory() as uow:
            return uow.repositories.pricing_tiers.list_all()

    def sync_one(self, tier: PricingTier) -> SyncResult:
        return self.reconciler.sync_one(tier)

    def sync_tier_id(self, tier_id: UUID) -> SyncResult:
        with self.unit_of_work_factory() as uow:
            tier = uow.repositories.pricing_tiers.get_by_id(tier_id)
        return self.reconciler.sync_one(tier)

    def sync_all(self) -> BatchSyncResult:
        tiers = self.list_tiers()
        log.info("Starting catalog sync: tiers=%s, pause=%ss", len(tiers), self.pause_seconds)

        batch = BatchSyncResult(summary=SyncSummary(total=len(tiers)))
        for index, tier in enumerate(tiers):
            if index and self.pause_seconds > 0:
                self.sleep(self.pause_seconds)
            result = self.reconciler.sync_one(tier)
            batch.results.append(result)
            batch.summary.record(result)

        summary = batch.summary
        log.info(
            "Finished catalog sync: total=%s, created=%s, updated=%s, disabled=%s, "
            "skipped=%s, errors=%s",
            summary.total,
            summary.created,
            summary.updated,
            summary.disabled,
            summary.skipped,
            summary.errors,
        )
        if not summary.success:
            log.warning("Catalog sync finished with %s failed tier(s)", summary.errors)
        return batch

    def plan(self) -> list[PlannedAction]:
        """Classify every tier without calling the provider."""

        return plan_tiers(self.list_tiers())
