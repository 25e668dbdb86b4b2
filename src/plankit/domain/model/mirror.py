"""Local mirror records and their projection from remote state.

Mirror rows are keyed by internal id; the remote id is carried as a unique but
nullable attribute. Projection returns ``None`` for resources that cannot be
keyed, which adapters treat as "skip".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from enum import StrEnum

    from .metadata import MetadataFields, MetadataValue
    from .remote import RemotePrice, RemoteProduct


def _text(value: StrEnum | None) -> str | None:
    return None if value is None else str(value)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(eq=False)
class MirrorProduct:
    id: str
    name: str
    remote_id: str | None = None
    description: str | None = None
    is_archived: bool = False
    is_recurring: bool = False
    organization_id: str | None = None
    recurring_interval: str | None = None
    meta: dict[str, MetadataValue] = field(default_factory=dict)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def refresh_from(self, other: MirrorProduct) -> None:
        self.remote_id = other.remote_id
        self.name = other.name
        self.description = other.description
        self.is_archived = other.is_archived
        self.is_recurring = other.is_recurring
        self.organization_id = other.organization_id
        self.recurring_interval = other.recurring_interval
        self.meta = dict(other.meta)
        self.updated_at = _utcnow()


@dataclass(eq=False)
class MirrorPrice:
    id: str
    amount_type: str
    remote_id: str | None = None
    product_id: str | None = None
    remote_product_id: str | None = None
    currency: str | None = None
    amount: int | None = None
    recurring_interval: str | None = None
    is_archived: bool = False
    meta: dict[str, MetadataValue] = field(default_factory=dict)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def refresh_from(self, other: MirrorPrice) -> None:
        self.remote_id = other.remote_id
        self.amount_type = other.amount_type
        self.product_id = other.product_id
        self.remote_product_id = other.remote_product_id
        self.currency = other.currency
        self.amount = other.amount
        self.recurring_interval = other.recurring_interval
        self.is_archived = other.is_archived
        self.meta = dict(other.meta)
        self.updated_at = _utcnow()


def project_product(product: RemoteProduct, fields: MetadataFields) -> MirrorProduct | None:
    internal_id = fields.internal_product_id(product.metadata)
    if internal_id is None:
        return None
    return MirrorProduct(
        id=internal_id,
        remote_id=product.id,
        name=product.name,
        description=product.description,
        is_archived=product.is_archived,
        is_recurring=product.is_recurring,
        organization_id=product.organization_id,
        recurring_interval=_text(product.recurring_interval),
        meta=dict(product.metadata),
    )


def project_price(price: RemotePrice, fields: MetadataFields) -> MirrorPrice | None:
    internal_id = fields.internal_price_id(price.metadata)
    internal_product_id = fields.internal_product_id(price.metadata)
    if internal_id is None and internal_product_id is None:
        return None
    return MirrorPrice(
        id=internal_id or price.id,
        remote_id=price.id,
        product_id=internal_product_id,
        remote_product_id=price.product_id,
        amount_type=str(price.amount_type),
        currency=price.currency,
        amount=price.amount,
        recurring_interval=_text(price.recurring_interval),
        is_archived=price.is_archived,
        meta=dict(price.metadata),
    )
