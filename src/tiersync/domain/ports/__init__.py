"""Domain port definitions for adapters."""

from __future__ import annotations

from .billing import BillingProviderClient, ProductStatus, ProviderError, ProviderNotFoundError
from .persistence import (
    PricingTierChanges,
    PricingTierRepository,
    Repository,
    RepositoryError,
    TierNotFoundError,
)
from .unit_of_work import (
    CatalogRepositories,
    CatalogUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "BillingProviderClient",
    "CatalogRepositories",
    "CatalogUnitOfWork",
    "PricingTierChanges",
    "PricingTierRepository",
    "ProductStatus",
    "ProviderError",
    "ProviderNotFoundError",
    "Repository",
    "RepositoryCollection",
    "RepositoryError",
    "TierNotFoundError",
    "UnitOfWork",
]
