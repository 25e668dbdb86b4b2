"""Database adapter that mirrors managed Polar resources into SQL tables."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from plankit.domain.model import project_price, project_product

from .unit_of_work import SqlAlchemyMirrorUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from plankit.domain.model import (
        MetadataFields,
        MirrorPrice,
        MirrorProduct,
        RemotePrice,
        RemoteProduct,
    )

log = getLogger(__name__)


class SqlAlchemyDatabaseAdapter:
    """Upserts products and prices keyed by internal id.

    Resources whose metadata carries no internal id are skipped. A price whose
    internal product id has no mirrored product is stored without the product
    link so the foreign key holds. Among rows sharing an internal id an active
    product wins, and a price wins when it belongs to the mirrored product.
    """

    def __init__(
        self,
        fields: MetadataFields,
        unit_of_work_factory: Callable[[], SqlAlchemyMirrorUnitOfWork] = SqlAlchemyMirrorUnitOfWork,
    ) -> None:
        self.fields = fields
        self._unit_of_work_factory = unit_of_work_factory

    def sync_products(self, products: Sequence[RemoteProduct]) -> None:
        rows: list[MirrorProduct] = []
        for remote in products:
            projected = project_product(remote, self.fields)
            if projected is None:
                log.warning(f"Skipping product {remote.id}: no internal id in metadata")
                continue
            rows.append(projected)

        with self._unit_of_work_factory() as uow:
            repository = uow.repositories.products
            for projected in _one_per_id(rows, lambda row: (not row.is_archived,)):
                existing = repository.get(projected.id)
                if existing is None:
                    repository.add(projected)
                else:
                    existing.refresh_from(projected)
            uow.commit()

    def sync_prices(self, prices: Sequence[RemotePrice]) -> None:
        rows: list[MirrorPrice] = []
        for remote in prices:
            projected = project_price(remote, self.fields)
            if projected is None:
                log.warning(f"Skipping price {remote.id}: no internal id in metadata")
                continue
            rows.append(projected)

        with self._unit_of_work_factory() as uow:
            products = uow.repositories.products
            repository = uow.repositories.prices
            owners = {product.id: product.remote_id for product in products.get_all()}

            def rank(row: MirrorPrice) -> tuple[bool, bool]:
                linked = row.product_id is not None and (
                    owners.get(row.product_id) == row.remote_product_id
                )
                return linked, not row.is_archived

            for projected in _one_per_id(rows, rank):
                if projected.product_id is not None and products.get(projected.product_id) is None:
                    log.warning(
                        f"Price {projected.id} references unknown product "
                        f"{projected.product_id}; storing it unlinked"
                    )
                    projected.product_id = None
                existing = repository.get(projected.id)
                if existing is None:
                    repository.add(projected)
                else:
                    existing.refresh_from(projected)
            uow.commit()

    def clear_products(self) -> None:
        with self._unit_of_work_factory() as uow:
            deleted = uow.repositories.products.delete_all()
            uow.commit()
        log.info(f"Cleared {deleted} mirrored products")

    def clear_prices(self) -> None:
        with self._unit_of_work_factory() as uow:
            deleted = uow.repositories.prices.delete_all()
            uow.commit()
        log.info(f"Cleared {deleted} mirrored prices")

    def get_products(self) -> list[MirrorProduct]:
        with self._unit_of_work_factory() as uow:
            return uow.repositories.products.get_all()

    def get_prices(self) -> list[MirrorPrice]:
        with self._unit_of_work_factory() as uow:
            return uow.repositories.prices.get_all()


def _one_per_id[TRow: (MirrorProduct, MirrorPrice)](
    rows: list[TRow],
    rank: Callable[[TRow], tuple[bool, ...]],
) -> list[TRow]:
    """Collapse rows sharing an internal id; the last row of the highest rank wins."""

    chosen: dict[str, TRow] = {}
    for row in rows:
        current = chosen.get(row.id)
        if current is None or rank(row) >= rank(current):
            chosen[row.id] = row
    return list(chosen.values())


if TYPE_CHECKING:
    from plankit.domain.ports import DatabaseAdapter, MirrorReader

    def _adapter_check(fields: MetadataFields) -> tuple[DatabaseAdapter, MirrorReader]:
        adapter = SqlAlchemyDatabaseAdapter(fields)
        return adapter, adapter
