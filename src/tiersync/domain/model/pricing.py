"""Pricing tiers sold by the storefront."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tiersync.domain.model.base import Entity

if TYPE_CHECKING:
    from datetime import datetime

CURRENCY_SYMBOLS: dict[str, str] = {"eur": "€", "usd": "$", "gbp": "£"}


class ExternalLinkError(ValueError):
    """Raised when a tier references a price without its parent product."""


def format_price(minor_units: int, currency: str = "eur") -> str:
    """Render minor units the way the storefront displays them (``2€``, ``12,50€``)."""

    symbol = CURRENCY_SYMBOLS.get(currency.lower(), f" {currency.upper()}")
    sign = "-" if minor_units < 0 else ""
    units, cents = divmod(abs(minor_units), 100)
    if cents:
        return f"{sign}{units},{cents:02d}{symbol}"
    return f"{sign}{units}{symbol}"


@dataclass(eq=False, kw_only=True)
class PricingTier(Entity):
    """A purchasable service offering mirrored in the billing provider.

    ``external_product_id`` and ``external_price_id`` link the tier to the
    provider's product and price. They are only written by the reconciler.
    """

    name: str
    description: str = ""
    price_minor_units: int
    service_category: str
    estimated_duration: str | None = None
    active: bool = True
    sort_order: int = 0
    external_product_id: str | None = None
    external_price_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        self.ensure_external_link()

    @property
    def formatted_price(self) -> str:
        return format_price(self.price_minor_units)

    @property
    def has_external_product(self) -> bool:
        return bool(self.external_product_id)

    @property
    def has_external_price(self) -> bool:
        return bool(self.external_price_id)

    def ensure_external_link(self) -> None:
        if self.has_external_price and not self.has_external_product:
            raise ExternalLinkError(
                f"Pricing tier {self.id} has price {self.external_price_id} without a product"
            )
