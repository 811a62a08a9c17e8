"""SQLAlchemy adapter package for the pricing catalog."""

from __future__ import annotations

from .mappings import (
    mapper_registry,
    pricing_tier_table,
    start_mappers,
)
from .repositories import SqlAlchemyPricingTierRepository
from .unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyPricingTierRepository",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "configured_engine",
    "is_started",
    "mapper_registry",
    "pricing_tier_table",
    "shutdown",
    "start_mappers",
    "startup",
]
