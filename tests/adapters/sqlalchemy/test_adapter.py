from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy.exc import IntegrityError

from plankit.adapters.sqlalchemy import SqlAlchemyDatabaseAdapter
from plankit.domain.mirroring import PurgeOrchestrator, SyncOrchestrator
from plankit.domain.model import MetadataFields
from plankit.domain.ports import DatabaseAdapter, MirrorReader
from plankit.domain.reconciliation import IdentityResolver, ReconciliationEngine
from tests.helpers.catalog import make_entry
from tests.helpers.remote import (
    FakeCatalogClient,
    make_remote_price,
    make_remote_product,
    managed_metadata,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from plankit.adapters.sqlalchemy import SqlAlchemyMirrorUnitOfWork


@pytest.fixture
def adapter(
    sqlite_unit_of_work: Callable[[], SqlAlchemyMirrorUnitOfWork],
) -> SqlAlchemyDatabaseAdapter:
    return SqlAlchemyDatabaseAdapter(MetadataFields(), sqlite_unit_of_work)


def test_adapter_satisfies_every_capability_group(adapter: SqlAlchemyDatabaseAdapter) -> None:
    assert isinstance(adapter, DatabaseAdapter)
    assert isinstance(adapter, MirrorReader)


def test_sync_round_trip_reflects_remote_state(adapter: SqlAlchemyDatabaseAdapter) -> None:
    client = FakeCatalogClient()
    fields = MetadataFields()
    resolver = IdentityResolver(client, fields)
    ReconciliationEngine(client, resolver).create(
        [make_entry("basic"), make_entry("pro", price_ids=("pro-m", "pro-y"))], "org-1"
    )
    client.products.append(make_remote_product("prod_manual", metadata={"note": "manual"}))

    result = SyncOrchestrator(resolver, adapter).sync("org-1")

    products = adapter.get_products()
    prices = adapter.get_prices()
    assert (result.products, result.prices) == (2, 3)
    assert [product.id for product in products] == ["basic", "pro"]
    assert {product.remote_id for product in products} == {
        product.id for product in client.products if product.id != "prod_manual"
    }
    assert [price.id for price in prices] == ["basic-price-1", "pro-m", "pro-y"]
    assert {price.product_id for price in prices} == {"basic", "pro"}


def test_sync_twice_updates_rows_in_place(adapter: SqlAlchemyDatabaseAdapter) -> None:
    client = FakeCatalogClient(
        products=[make_remote_product("prod_1", metadata=managed_metadata("pro"), name="Pro")],
    )
    resolver = IdentityResolver(client, MetadataFields())
    orchestrator = SyncOrchestrator(resolver, adapter)
    orchestrator.sync("org-1")
    created_at = adapter.get_products()[0].created_at

    client.products[0] = make_remote_product(
        "prod_1", metadata=managed_metadata("pro"), name="Pro Plus", is_archived=True
    )
    orchestrator.sync("org-1")

    (product,) = adapter.get_products()
    assert product.name == "Pro Plus"
    assert product.is_archived
    assert product.created_at == created_at


def test_price_without_mirrored_product_is_stored_unlinked(
    adapter: SqlAlchemyDatabaseAdapter,
) -> None:
    fields = MetadataFields()
    price = make_remote_price("price_1", "prod_9", metadata=fields.price_tag("ghost-1", "ghost"))

    adapter.sync_prices([price])

    (stored,) = adapter.get_prices()
    assert stored.id == "ghost-1"
    assert stored.product_id is None
    assert stored.remote_product_id == "prod_9"


def test_untagged_resources_are_skipped(adapter: SqlAlchemyDatabaseAdapter) -> None:
    adapter.sync_products([make_remote_product("prod_1", metadata={"managed_by": "plankit"})])
    adapter.sync_prices([make_remote_price("price_1", "prod_1")])

    assert adapter.get_products() == []
    assert adapter.get_prices() == []


def _seed(adapter: SqlAlchemyDatabaseAdapter) -> None:
    fields = MetadataFields()
    product = make_remote_product(
        "prod_1",
        metadata=managed_metadata("pro"),
        prices=(make_remote_price("price_1", "prod_1", metadata=fields.price_tag("pro-1", "pro")),),
    )
    adapter.sync_products([product])
    adapter.sync_prices(list(product.prices))


def test_purge_empties_the_mirror(adapter: SqlAlchemyDatabaseAdapter) -> None:
    _seed(adapter)

    PurgeOrchestrator(adapter).purge()

    assert adapter.get_products() == []
    assert adapter.get_prices() == []


def test_clearing_products_before_prices_violates_the_foreign_key(
    adapter: SqlAlchemyDatabaseAdapter,
) -> None:
    _seed(adapter)

    with pytest.raises(IntegrityError):
        adapter.clear_products()

    assert len(adapter.get_products()) == 1


def test_active_product_wins_over_archived_duplicate(adapter: SqlAlchemyDatabaseAdapter) -> None:
    adapter.sync_products(
        [
            make_remote_product("prod_new", metadata=managed_metadata("pro")),
            make_remote_product("prod_old", metadata=managed_metadata("pro"), is_archived=True),
        ]
    )

    (product,) = adapter.get_products()
    assert product.remote_id == "prod_new"
    assert not product.is_archived


def test_price_of_recreated_product_wins_over_archived_duplicate(
    adapter: SqlAlchemyDatabaseAdapter,
) -> None:
    fields = MetadataFields()
    tag = fields.price_tag("pro-monthly", "pro")
    client = FakeCatalogClient(
        products=[
            make_remote_product(
                "prod_new",
                metadata=managed_metadata("pro"),
                prices=(make_remote_price("price_new", "prod_new", metadata=tag),),
            ),
            make_remote_product(
                "prod_old",
                metadata=managed_metadata("pro"),
                is_archived=True,
                prices=(make_remote_price("price_old", "prod_old", metadata=tag),),
            ),
        ],
    )

    SyncOrchestrator(IdentityResolver(client, fields), adapter).sync("org-1")

    (product,) = adapter.get_products()
    (price,) = adapter.get_prices()
    assert product.remote_id == "prod_new"
    assert price.remote_id == "price_new"
    assert price.remote_product_id == product.remote_id
