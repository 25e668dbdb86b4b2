"""Application services mirroring managed remote state into a local store."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, cast

from plankit.domain.ports import (
    MirrorPurgeAdapter,
    MirrorReader,
    MirrorSyncAdapter,
    require_capabilities,
    supports,
)

if TYPE_CHECKING:
    from plankit.domain.model import RemotePrice, RemoteProduct
    from plankit.domain.reconciliation import IdentityResolver

log = getLogger(__name__)


@dataclass(slots=True)
class SyncResult:
    """Outcome of a mirror sync."""

    products: int
    prices: int

    def summary(self) -> str:
        return f"products={self.products}, prices={self.prices}"


@dataclass(slots=True)
class PurgeResult:
    cleared_prices: bool = False
    cleared_products: bool = False

    def summary(self) -> str:
        return f"prices_cleared={self.cleared_prices}, products_cleared={self.cleared_products}"


class SyncOrchestrator:
    """Push the managed remote catalog through the adapter's sync group.

    The adapter is validated on construction. Products are synced before
    prices; an error from either step propagates and leaves whatever was
    already written in place, which a rerun overwrites.
    """

    def __init__(self, resolver: IdentityResolver, adapter: object) -> None:
        require_capabilities(adapter, MirrorSyncAdapter)
        self.resolver = resolver
        self.adapter = cast("MirrorSyncAdapter", adapter)

    def sync(self, organization_id: str | None) -> SyncResult:
        log.info("Syncing managed catalog to database")

        products: list[RemoteProduct] = list(self.resolver.list_managed(organization_id))
        prices: list[RemotePrice] = [
            price
            for product in products
            for price in self.resolver.prices_of(product, include_all=False)
        ]
        log.info("Found %s managed products and %s managed prices", len(products), len(prices))

        self.adapter.sync_products(products)
        log.info("Products synced")
        self.adapter.sync_prices(prices)
        log.info("Prices synced")

        if supports(self.adapter, MirrorReader):
            reader = cast("MirrorReader", self.adapter)
            log.info(
                "Mirror holds %s products and %s prices",
                len(reader.get_products()),
                len(reader.get_prices()),
            )

        return SyncResult(products=len(products), prices=len(prices))


class PurgeOrchestrator:
    """Delete every mirrored row, prices first."""

    def __init__(self, adapter: object) -> None:
        require_capabilities(adapter, MirrorPurgeAdapter)
        self.adapter = cast("MirrorPurgeAdapter", adapter)

    def purge(self) -> PurgeResult:
        result = PurgeResult()
        # price rows reference product rows
        log.info("Clearing prices from database")
        self.adapter.clear_prices()
        result.cleared_prices = True
        log.info("Clearing products from database")
        self.adapter.clear_products()
        result.cleared_products = True
        log.info("Mirror cleared")
        return result
