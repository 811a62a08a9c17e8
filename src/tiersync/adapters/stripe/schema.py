"""Pydantic models describing the Stripe API payloads we read."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class StripeBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ProductPayload(StripeBaseModel):
    id: str
    object: str = "product"
    active: bool = True
    name: str | None = None
    description: str | None = None
    metadata: dict[str, str] = Field(default_factory=dict)


class PricePayload(StripeBaseModel):
    id: str
    object: str = "price"
    product: str
    active: bool = True
    currency: str
    unit_amount: int | None = None
    metadata: dict[str, str] = Field(default_factory=dict)


class ErrorDetail(StripeBaseModel):
    message: str = "Unknown Stripe error"
    type: str | None = None
    code: str | None = None
    param: str | None = None


class ErrorResponse(StripeBaseModel):
    error: ErrorDetail
