"""Port for the remote catalog service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from plankit.domain.model import (
        AmountType,
        MetadataValue,
        PriceType,
        RecurringInterval,
        RemoteProduct,
    )


@dataclass(slots=True)
class ProductPage:
    """One page of a product listing. Pages are numbered from 1."""

    items: list[RemoteProduct]
    page: int
    max_page: int

    @property
    def is_last(self) -> bool:
        return self.page >= self.max_page


@dataclass(slots=True)
class PriceCreate:
    amount_type: AmountType
    price_type: PriceType
    currency: str | None = None
    amount: int | None = None
    recurring_interval: RecurringInterval | None = None
    minimum_amount: int | None = None
    maximum_amount: int | None = None
    preset_amount: int | None = None
    metadata: dict[str, MetadataValue] = field(default_factory=dict)


@dataclass(slots=True)
class ProductCreate:
    name: str
    organization_id: str | None
    prices: list[PriceCreate]
    description: str | None = None
    recurring_interval: RecurringInterval | None = None
    metadata: dict[str, MetadataValue] = field(default_factory=dict)


@dataclass(slots=True)
class ProductUpdate:
    """Partial update; ``None`` fields are left untouched remotely."""

    name: str | None = None
    description: str | None = None
    metadata: dict[str, MetadataValue] | None = None
    is_archived: bool | None = None


@runtime_checkable
class RemoteCatalogClient(Protocol):
    """List/create/update/get surface of the remote catalog service."""

    def list_products(
        self,
        organization_id: str | None,
        *,
        page: int = 1,
        limit: int = 100,
    ) -> ProductPage: ...

    def create_product(self, product: ProductCreate) -> RemoteProduct: ...

    def update_product(self, remote_id: str, patch: ProductUpdate) -> RemoteProduct: ...

    def get_product(self, remote_id: str) -> RemoteProduct: ...
