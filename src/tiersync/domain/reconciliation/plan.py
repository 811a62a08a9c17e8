"""Classification of a pricing tier into the action that reconciles it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, assert_never

from tiersync.domain.model import TierAction

if TYPE_CHECKING:
    from tiersync.domain.model import PricingTier


def plan_action(tier: PricingTier) -> TierAction:
    """Return the action for ``tier``; the first matching rule wins.

    The decision only looks at the tier's own persisted fields, so it is stable
    across repeated passes over an unchanged tier.
    """

    if tier.active and not tier.has_external_product:
        return TierAction.CREATE
    if tier.active:
        return TierAction.UPDATE
    if tier.has_external_price:
        return TierAction.DISABLE
    return TierAction.SKIP


@dataclass(frozen=True, slots=True)
class PlannedAction:
    tier: PricingTier
    action: TierAction

    def describe(self) -> str:
        match self.action:
            case TierAction.CREATE:
                return f"create product and price for {self.tier.name}"
            case TierAction.UPDATE:
                return f"update product {self.tier.external_product_id} for {self.tier.name}"
            case TierAction.DISABLE:
                return f"archive product {self.tier.external_product_id} for {self.tier.name}"
            case TierAction.SKIP:
                return f"nothing to do for {self.tier.name}"
            case _:
                assert_never(self.action)


def plan_tiers(tiers: list[PricingTier]) -> list[PlannedAction]:
    return [PlannedAction(tier=tier, action=plan_action(tier)) for tier in tiers]
