"""Port for the external billing provider mirroring pricing tiers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping


class ProviderError(RuntimeError):
    """Raised when the billing provider rejects a request or cannot be reached."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class ProviderNotFoundError(ProviderError):
    """Raised when the referenced provider object does not exist."""


@dataclass(frozen=True, slots=True)
class ProductStatus:
    product_id: str
    active: bool


@runtime_checkable
class BillingProviderClient(Protocol):
    """Operations the reconciler needs from the billing provider.

    Every method raises ``ProviderError`` on transport or validation failures,
    except ``retrieve_product`` which reports a missing product as inactive.
    """

    def create_product(
        self,
        *,
        name: str,
        description: str,
        metadata: Mapping[str, str],
    ) -> str: ...

    def create_price(
        self,
        *,
        product_id: str,
        unit_amount: int,
        currency: str,
        metadata: Mapping[str, str],
    ) -> str: ...

    def update_product(
        self,
        product_id: str,
        *,
        name: str,
        description: str,
        metadata: Mapping[str, str],
    ) -> None: ...

    def archive_product(self, product_id: str, *, metadata: Mapping[str, str]) -> None: ...

    def retrieve_product(self, product_id: str) -> ProductStatus: ...


__all__ = [
    "BillingProviderClient",
    "ProductStatus",
    "ProviderError",
    "ProviderNotFoundError",
]
