"""Identity resolution against a remote service without lookup by external id.

The remote catalog only offers paginated listing, so every "does a managed
product exist for this internal id?" question is answered by a linear scan of
the listing filtered through the ownership tag. The cost is O(n) in the number
of products of the organization for each uncached lookup. ``ListingSnapshot``
materialises one scan for the lifetime of a single top-level operation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Collection, Iterator

    from plankit.domain.model import MetadataFields, RemotePrice, RemoteProduct
    from plankit.domain.ports import RemoteCatalogClient

log = getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


@dataclass(slots=True)
class IdentityResolver:
    client: RemoteCatalogClient
    fields: MetadataFields
    page_size: int = DEFAULT_PAGE_SIZE

    def list_managed(
        self,
        organization_id: str | None,
        *,
        include_all: bool = False,
    ) -> Iterator[RemoteProduct]:
        """Yield listed products, page by page, optionally only managed ones."""

        page = 1
        while True:
            result = self.client.list_products(organization_id, page=page, limit=self.page_size)
            log.debug(
                "Listed page %s/%s (%s products)", result.page, result.max_page, len(result.items)
            )
            for product in result.items:
                if include_all or self.fields.is_managed_product(product.metadata):
                    yield product
            if result.is_last or not result.items:
                return
            page += 1

    def list_managed_prices(
        self,
        organization_id: str | None,
        *,
        include_all: bool = False,
    ) -> Iterator[RemotePrice]:
        """Flatten prices of the listed products.

        With ``include_all=False`` only managed products are visited and only
        prices carrying the price tag are yielded.
        """

        for product in self.list_managed(organization_id, include_all=include_all):
            yield from self.prices_of(product, include_all=include_all)

    def find_by_internal_id(
        self,
        organization_id: str | None,
        internal_product_id: str,
    ) -> RemoteProduct | None:
        for product in self.list_managed(organization_id):
            if self._matches(product, internal_product_id):
                return product
        return None

    def find_price_by_internal_id(
        self,
        remote_product_id: str,
        internal_price_id: str,
    ) -> RemotePrice | None:
        product = self.client.get_product(remote_product_id)
        for price in product.prices:
            if price.is_archived:
                continue
            if (
                self.fields.is_owned(price.metadata)
                and self.fields.internal_price_id(price.metadata) == internal_price_id
            ):
                return price
        return None

    def snapshot(self, organization_id: str | None) -> ListingSnapshot:
        products = tuple(self.list_managed(organization_id))
        log.info("Found %s managed products", len(products))
        return ListingSnapshot(products=products, resolver=self)

    def _matches(self, product: RemoteProduct, internal_product_id: str) -> bool:
        return (
            not product.is_archived
            and self.fields.internal_product_id(product.metadata) == internal_product_id
        )

    def prices_of(self, product: RemoteProduct, *, include_all: bool) -> Iterator[RemotePrice]:
        for price in product.prices:
            if include_all or self.fields.is_managed_price(price.metadata):
                yield price


@dataclass(slots=True)
class ListingSnapshot:
    """Managed products as listed once; never refreshed after creation."""

    products: tuple[RemoteProduct, ...]
    resolver: IdentityResolver
    _by_internal_id: dict[str, RemoteProduct] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        index: dict[str, RemoteProduct] = {}
        for product in self.products:
            internal_id = self.resolver.fields.internal_product_id(product.metadata)
            if internal_id is None or product.is_archived:
                continue
            # first listed match wins, as with the uncached scan
            index.setdefault(internal_id, product)
        self._by_internal_id = index

    def find(self, internal_product_id: str) -> RemoteProduct | None:
        return self._by_internal_id.get(internal_product_id)

    def prices_for(self, internal_product_ids: Collection[str]) -> list[RemotePrice]:
        fields = self.resolver.fields
        prices: list[RemotePrice] = []
        for product in self.products:
            if product.is_archived:
                continue
            if fields.internal_product_id(product.metadata) not in internal_product_ids:
                continue
            prices.extend(self.resolver.prices_of(product, include_all=False))
        return prices
