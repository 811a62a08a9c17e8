"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Unpack

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from tiersync.adapters.sqlalchemy.mappings import pricing_tier_table
from tiersync.domain.clock import utcnow
from tiersync.domain.model import PricingTier
from tiersync.domain.ports.persistence import (
    PricingTierChanges,
    RepositoryError,
    TierNotFoundError,
)

if TYPE_CHECKING:
    from uuid import UUID

    from sqlalchemy.orm import Session


class SqlAlchemyPricingTierRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: PricingTier) -> None:
        entity.ensure_external_link()
        now = utcnow()
        entity.created_at = entity.created_at or now
        entity.updated_at = entity.updated_at or now
        self.session.add(entity)

    def list_all(self) -> list[PricingTier]:
        stmt = select(PricingTier).order_by(
            pricing_tier_table.c.sort_order,
            pricing_tier_table.c.created_at,
            pricing_tier_table.c.id,
        )
        try:
            return list(self.session.execute(stmt).scalars())
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Could not list pricing tiers: {exc}") from exc

    def get_by_id(self, tier_id: UUID) -> PricingTier:
        try:
            tier = self.session.get(PricingTier, tier_id)
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Could not load pricing tier {tier_id}: {exc}") from exc
        if tier is None:
            raise TierNotFoundError(tier_id)
        return tier

    def update_by_id(self, tier_id: UUID, **changes: Unpack[PricingTierChanges]) -> PricingTier:
        tier = self.get_by_id(tier_id)
        for key, value in changes.items():
            setattr(tier, key, value)
        tier.ensure_external_link()
        tier.updated_at = utcnow()
        try:
            self.session.flush()
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Could not update pricing tier {tier_id}: {exc}") from exc
        return tier
