"""SQLAlchemy mapping metadata for the catalog mirror."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Dialect,
    ForeignKey,
    Integer,
    String,
    Table,
    TypeDecorator,
    orm,
)
from sqlalchemy.orm import configure_mappers

from plankit.domain.model import MirrorPrice, MirrorProduct

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


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

# Mirror tables ---------------------------------------------------------------

product_table = Table(
    "product",
    mapper_registry.metadata,
    Column("id", String(255), primary_key=True),
    Column("remote_id", String(64), nullable=True, unique=True),
    Column("name", String(255), nullable=False),
    Column("description", String, nullable=True),
    Column("is_archived", Boolean, nullable=False, default=False),
    Column("is_recurring", Boolean, nullable=False, default=False),
    Column("organization_id", String(64), nullable=True),
    Column("recurring_interval", String(16), nullable=True),
    Column("metadata", JSON, nullable=False, default=dict, key="meta"),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
)

price_table = Table(
    "price",
    mapper_registry.metadata,
    Column("id", String(255), primary_key=True),
    Column("remote_id", String(64), nullable=True, unique=True),
    Column("product_id", String(255), ForeignKey("product.id"), nullable=True, index=True),
    Column("remote_product_id", String(64), nullable=True),
    Column("amount_type", String(32), nullable=False),
    Column("currency", String(3), nullable=True),
    Column("amount", Integer, nullable=True),
    Column("recurring_interval", String(16), nullable=True),
    Column("is_archived", Boolean, nullable=False, default=False),
    Column("metadata", JSON, nullable=False, default=dict, key="meta"),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
)


@cache
def start_mappers() -> orm.registry:
    """Map the mirror records onto their tables."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(MirrorProduct, product_table)
    mapper_registry.map_imperatively(MirrorPrice, price_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
