"""Outcome types reported by single-tier and batch synchronization."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, assert_never

from tiersync.domain.model import SyncAction

if TYPE_CHECKING:
    from uuid import UUID

    from tiersync.domain.model import PricingTier


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Outcome of reconciling one tier. Never persisted."""

    success: bool
    tier_id: UUID
    action: SyncAction
    message: str
    external_product_id: str | None = None
    external_price_id: str | None = None
    error: str | None = None

    @classmethod
    def failure(cls, tier: PricingTier, exc: BaseException) -> SyncResult:
        return cls(
            success=False,
            tier_id=tier.id,
            action=SyncAction.ERROR,
            message=f"Billing sync failed for {tier.name}",
            external_product_id=tier.external_product_id,
            external_price_id=tier.external_price_id,
            error=str(exc) or type(exc).__name__,
        )


@dataclass(slots=True)
class SyncSummary:
    total: int = 0
    created: int = 0
    updated: int = 0
    disabled: int = 0
    skipped: int = 0
    errors: int = 0

    @property
    def success(self) -> bool:
        return self.errors == 0

    def record(self, result: SyncResult) -> None:
        if not result.success:
            self.errors += 1
            return
        match result.action:
            case SyncAction.CREATED:
                self.created += 1
            case SyncAction.UPDATED:
                self.updated += 1
            case SyncAction.DISABLED:
                self.disabled += 1
            case SyncAction.SKIPPED:
                self.skipped += 1
            case SyncAction.ERROR:
                self.errors += 1
            case _:
                assert_never(result.action)


@dataclass(slots=True)
class BatchSyncResult:
    """Outcome of a full catalog pass."""

    results: list[SyncResult] = field(default_factory=list[SyncResult])
    summary: SyncSummary = field(default_factory=SyncSummary)

    @property
    def success(self) -> bool:
        return self.summary.success
