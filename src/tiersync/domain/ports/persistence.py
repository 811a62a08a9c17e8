"""Ports for persisting domain aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypedDict, Unpack, runtime_checkable

from tiersync.domain.model import PricingTier

if TYPE_CHECKING:
    from uuid import UUID


class RepositoryError(RuntimeError):
    """Raised when the catalog store cannot read or write a record."""


class TierNotFoundError(RepositoryError):
    """Raised when no pricing tier exists for the requested id."""

    def __init__(self, tier_id: UUID) -> None:
        super().__init__(f"Pricing tier {tier_id} not found")
        self.tier_id = tier_id


class PricingTierChanges(TypedDict, total=False):
    name: str
    description: str
    price_minor_units: int
    service_category: str
    estimated_duration: str | None
    active: bool
    sort_order: int
    external_product_id: str | None
    external_price_id: str | None


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class PricingTierRepository(Repository[PricingTier], Protocol):
    """Persistence contract for pricing tiers."""

    def list_all(self) -> list[PricingTier]:
        """Return every tier ordered by ``sort_order`` ascending."""
        ...

    def get_by_id(self, tier_id: UUID) -> PricingTier: ...

    def update_by_id(self, tier_id: UUID, **changes: Unpack[PricingTierChanges]) -> PricingTier: ...


__all__ = [
    "PricingTierChanges",
    "PricingTierRepository",
    "Repository",
    "RepositoryError",
    "TierNotFoundError",
]
