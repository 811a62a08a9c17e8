"""Public domain model surface."""

from __future__ import annotations

from tiersync.domain.model.base import Entity, new_id
from tiersync.domain.model.enums import SyncAction, TierAction
from tiersync.domain.model.pricing import (
    ExternalLinkError,
    PricingTier,
    format_price,
)

__all__ = [
    "Entity",
    "ExternalLinkError",
    "PricingTier",
    "SyncAction",
    "TierAction",
    "format_price",
    "new_id",
]
