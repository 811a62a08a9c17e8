"""HTTP client for the Stripe products and prices API."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING
from uuid import uuid4

import httpx
from pydantic import ValidationError

from tiersync.adapters.http_resilience import ResilientClient
from tiersync.domain.ports.billing import ProductStatus, ProviderError, ProviderNotFoundError

from .schema import ErrorResponse, PricePayload, ProductPayload, StripeBaseModel

if TYPE_CHECKING:
    from tiersync.config.billing import StripeConfig
    from tiersync.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

FormData = dict[str, str | int]


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def _new_idempotency_key() -> str:
    return uuid4().hex


def _metadata_fields(metadata: Mapping[str, str]) -> FormData:
    return {f"metadata[{key}]": value for key, value in metadata.items()}


def _product_fields(name: str, description: str, metadata: Mapping[str, str]) -> FormData:
    data: FormData = {"name": name}
    # Stripe rejects empty strings for description
    if description.strip():
        data["description"] = description
    data.update(_metadata_fields(metadata))
    return data


class StripeAPIError(ProviderError):
    """Raised when Stripe answers with an error payload."""


@dataclass(slots=True)
class StripeBillingClient:
    """Billing provider client backed by the Stripe REST API."""

    config: StripeConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    idempotency_key: Callable[[], str] = field(default=_new_idempotency_key)

    def create_product(
        self,
        *,
        name: str,
        description: str,
        metadata: Mapping[str, str],
    ) -> str:
        payload = self._call("POST", "products", data=_product_fields(name, description, metadata))
        product = self._parse(ProductPayload, payload)
        log.info("Created Stripe product %s for %s", product.id, name)
        return product.id

    def create_price(
        self,
        *,
        product_id: str,
        unit_amount: int,
        currency: str,
        metadata: Mapping[str, str],
    ) -> str:
        data: FormData = {
            "product": product_id,
            "unit_amount": unit_amount,
            "currency": currency,
        }
        data.update(_metadata_fields(metadata))
        price = self._parse(PricePayload, self._call("POST", "prices", data=data))
        log.info("Created Stripe price %s for product %s", price.id, product_id)
        return price.id

    def update_product(
        self,
        product_id: str,
        *,
        name: str,
        description: str,
        metadata: Mapping[str, str],
    ) -> None:
        payload = self._call(
            "POST",
            f"products/{product_id}",
            data=_product_fields(name, description, metadata),
        )
        self._parse(ProductPayload, payload)
        log.info("Updated Stripe product %s", product_id)

    def archive_product(self, product_id: str, *, metadata: Mapping[str, str]) -> None:
        data: FormData = {"active": "false"}
        data.update(_metadata_fields(metadata))
        self._parse(ProductPayload, self._call("POST", f"products/{product_id}", data=data))
        log.info("Archived Stripe product %s", product_id)

    def retrieve_product(self, product_id: str) -> ProductStatus:
        try:
            payload = self._call("GET", f"products/{product_id}")
        except ProviderNotFoundError:
            log.warning("Stripe product %s not found", product_id)
            return ProductStatus(product_id=product_id, active=False)
        product = self._parse(ProductPayload, payload)
        return ProductStatus(product_id=product.id, active=product.active)

    def _call(self, method: str, path: str, *, data: FormData | None = None) -> object:
        return asyncio.run(self._request(method, path, data=data))

    async def _request(self, method: str, path: str, *, data: FormData | None) -> object:
        headers = {
            "Authorization": f"Bearer {self.config.secret_key}",
            "Stripe-Version": self.config.api_version,
        }
        if method == "POST":
            # makes transport-level retries of writes safe
            headers["Idempotency-Key"] = self.idempotency_key()

        try:
            async with self.client_factory(self.config.resilience) as client:
                response = await client.request(method, path, data=data, headers=headers)
        except httpx.HTTPError as exc:
            raise ProviderError(f"Stripe request {method} {path} failed: {exc}") from exc

        try:
            payload = response.json()
        except json.JSONDecodeError:
            raise ProviderError(
                f"Stripe returned a non-JSON response ({response.status_code})",
                status_code=response.status_code,
            ) from None

        if response.is_error:
            raise self._error_from(response.status_code, payload)
        return payload

    @staticmethod
    def _error_from(status_code: int, payload: object) -> ProviderError:
        try:
            detail = ErrorResponse.model_validate(payload).error
        except ValidationError:
            message, code = f"Stripe error {status_code}", None
        else:
            message, code = detail.message, detail.code

        log.error("Stripe API error %s (%s): %s", status_code, code, message)
        if status_code == httpx.codes.NOT_FOUND:
            return ProviderNotFoundError(message, code=code, status_code=status_code)
        return StripeAPIError(message, code=code, status_code=status_code)

    @staticmethod
    def _parse[TModel: StripeBaseModel](
        model: type[TModel],
        payload: object,
    ) -> TModel:
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise ProviderError(f"Unexpected Stripe {model.__name__} payload: {exc}") from exc

