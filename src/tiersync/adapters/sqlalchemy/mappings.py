"""SQLAlchemy mapping metadata for the pricing catalog."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Dialect,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    Uuid,
    func,
    orm,
)

from tiersync.domain.model import PricingTier

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

pricing_tier_table = Table(
    "pricing_tier",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
    Column("description", Text, nullable=False, default=""),
    Column("price_minor_units", Integer, nullable=False),
    Column("service_category", String, nullable=False),
    Column("estimated_duration", String, nullable=True),
    Column("active", Boolean, nullable=False, default=True),
    Column("sort_order", Integer, nullable=False, default=0),
    Column("external_product_id", String, nullable=True),
    Column("external_price_id", String, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False, server_default=func.current_timestamp()),
    Column("updated_at", UTCDateTime(), nullable=False, server_default=func.current_timestamp()),
    CheckConstraint(
        "external_price_id IS NULL OR external_product_id IS NOT NULL",
        name="price_requires_product",
    ),
    Index("ix_pricing_tier_sort_order", "sort_order"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(
        PricingTier,
        pricing_tier_table,
        # server defaults must be loaded back after insert
        eager_defaults=True,
    )
    orm.configure_mappers()
    return mapper_registry

