"""In-memory remote catalog service for reconciliation tests."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING

from plankit.domain.errors import RemoteAPIError
from plankit.domain.model import AmountType, RemotePrice, RemoteProduct
from plankit.domain.ports import ProductPage

if TYPE_CHECKING:
    from collections.abc import Mapping

    from plankit.domain.model import MetadataValue
    from plankit.domain.ports import ProductCreate, ProductUpdate


def make_remote_product(
    remote_id: str,
    *,
    metadata: Mapping[str, MetadataValue] | None = None,
    name: str | None = None,
    is_archived: bool = False,
    prices: tuple[RemotePrice, ...] = (),
    organization_id: str = "org-1",
) -> RemoteProduct:
    return RemoteProduct(
        id=remote_id,
        name=name or remote_id,
        is_archived=is_archived,
        organization_id=organization_id,
        metadata=MappingProxyType(dict(metadata or {})),
        prices=prices,
    )


def make_remote_price(
    remote_id: str,
    product_id: str,
    *,
    metadata: Mapping[str, MetadataValue] | None = None,
    is_archived: bool = False,
) -> RemotePrice:
    return RemotePrice(
        id=remote_id,
        product_id=product_id,
        amount_type=AmountType.FIXED,
        currency="usd",
        amount=1000,
        is_archived=is_archived,
        metadata=MappingProxyType(dict(metadata or {})),
    )


def managed_metadata(internal_id: str) -> dict[str, MetadataValue]:
    return {"internal_product_id": internal_id, "managed_by": "plankit"}


@dataclass
class FakeCatalogClient:
    """Paginated fake of the remote catalog port recording every call."""

    products: list[RemoteProduct] = field(default_factory=list)
    page_size: int | None = None
    organization_id: str = "org-1"
    fail_create_for: set[str] = field(default_factory=set)
    fail_update_for: set[str] = field(default_factory=set)
    calls: list[tuple[str, ...]] = field(default_factory=list)
    _counter: int = 0

    def list_products(
        self,
        organization_id: str | None,
        *,
        page: int = 1,
        limit: int = 100,
    ) -> ProductPage:
        self.calls.append(("list", str(page)))
        size = self.page_size or limit
        scoped = [
            product
            for product in self.products
            if organization_id is None or product.organization_id == organization_id
        ]
        max_page = max(1, -(-len(scoped) // size))
        start = (page - 1) * size
        return ProductPage(items=scoped[start : start + size], page=page, max_page=max_page)

    def create_product(self, product: ProductCreate) -> RemoteProduct:
        internal_id = product.metadata.get("internal_product_id")
        self.calls.append(("create", str(internal_id)))
        if internal_id in self.fail_create_for:
            raise RemoteAPIError(f"create rejected for {internal_id}", status_code=422)
        remote_id = self._next_id("prod")
        prices = tuple(
            RemotePrice(
                id=self._next_id("price"),
                product_id=remote_id,
                amount_type=price.amount_type,
                price_type=price.price_type,
                currency=price.currency,
                amount=price.amount,
                recurring_interval=price.recurring_interval,
                metadata=MappingProxyType(dict(price.metadata)),
            )
            for price in product.prices
        )
        created = RemoteProduct(
            id=remote_id,
            name=product.name,
            description=product.description,
            is_recurring=product.recurring_interval is not None,
            recurring_interval=product.recurring_interval,
            organization_id=product.organization_id or self.organization_id,
            metadata=MappingProxyType(dict(product.metadata)),
            prices=prices,
        )
        self.products.append(created)
        return created

    def update_product(self, remote_id: str, patch: ProductUpdate) -> RemoteProduct:
        self.calls.append(("update", remote_id))
        if remote_id in self.fail_update_for:
            raise RemoteAPIError(f"update rejected for {remote_id}", status_code=500)
        index, current = self._lookup(remote_id)
        changes: dict[str, object] = {}
        if patch.name is not None:
            changes["name"] = patch.name
        if patch.description is not None:
            changes["description"] = patch.description
        if patch.metadata is not None:
            changes["metadata"] = MappingProxyType(dict(patch.metadata))
        if patch.is_archived is not None:
            changes["is_archived"] = patch.is_archived
        updated = replace(current, **changes)
        self.products[index] = updated
        return updated

    def get_product(self, remote_id: str) -> RemoteProduct:
        self.calls.append(("get", remote_id))
        return self._lookup(remote_id)[1]

    def mutations(self) -> list[tuple[str, ...]]:
        return [call for call in self.calls if call[0] in {"create", "update"}]

    def _lookup(self, remote_id: str) -> tuple[int, RemoteProduct]:
        for index, product in enumerate(self.products):
            if product.id == remote_id:
                return index, product
        raise RemoteAPIError(f"product {remote_id} not found", status_code=404)

    def _next_id(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}_{self._counter}"
