from __future__ import annotations

from plankit.domain.model import MetadataFields
from plankit.domain.reconciliation import IdentityResolver
from tests.helpers.remote import (
    FakeCatalogClient,
    make_remote_price,
    make_remote_product,
    managed_metadata,
)


def _resolver(client: FakeCatalogClient, fields: MetadataFields | None = None) -> IdentityResolver:
    return IdentityResolver(client, fields or MetadataFields(), page_size=2)


def test_list_managed_walks_every_page() -> None:
    client = FakeCatalogClient(
        products=[
            make_remote_product(f"prod_{index}", metadata=managed_metadata(f"plan-{index}"))
            for index in range(5)
        ],
    )

    listed = list(_resolver(client).list_managed("org-1"))

    assert [product.id for product in listed] == [f"prod_{index}" for index in range(5)]
    assert [call for call in client.calls if call[0] == "list"] == [
        ("list", "1"),
        ("list", "2"),
        ("list", "3"),
    ]


def test_list_managed_filters_unmanaged_products() -> None:
    client = FakeCatalogClient(
        products=[
            make_remote_product("prod_1", metadata=managed_metadata("pro")),
            make_remote_product("prod_2", metadata={"internal_product_id": "pro"}),
            make_remote_product("prod_3", metadata={"managed_by": "plankit"}),
            make_remote_product(
                "prod_4", metadata={"internal_product_id": 7, "managed_by": "plankit"}
            ),
        ],
    )
    resolver = _resolver(client)

    assert [product.id for product in resolver.list_managed("org-1")] == ["prod_1"]
    assert len(list(resolver.list_managed("org-1", include_all=True))) == 4


def test_list_managed_is_scoped_to_the_organization() -> None:
    client = FakeCatalogClient(
        products=[
            make_remote_product("prod_1", metadata=managed_metadata("pro")),
            make_remote_product(
                "prod_2", metadata=managed_metadata("pro"), organization_id="org-2"
            ),
        ],
    )

    assert [product.id for product in _resolver(client).list_managed("org-2")] == ["prod_2"]


def test_find_by_internal_id_ignores_archived_products() -> None:
    client = FakeCatalogClient(
        products=[
            make_remote_product("prod_1", metadata=managed_metadata("pro"), is_archived=True),
            make_remote_product("prod_2", metadata=managed_metadata("pro")),
        ],
    )
    resolver = _resolver(client)

    found = resolver.find_by_internal_id("org-1", "pro")

    assert found is not None
    assert found.id == "prod_2"
    assert resolver.find_by_internal_id("org-1", "missing") is None


def test_find_price_by_internal_id_reads_the_product() -> None:
    fields = MetadataFields()
    prices = (
        make_remote_price(
            "price_1", "prod_1", metadata=fields.price_tag("pro-m", "pro"), is_archived=True
        ),
        make_remote_price("price_2", "prod_1", metadata=fields.price_tag("pro-m", "pro")),
        make_remote_price("price_3", "prod_1", metadata={"internal_price_id": "pro-y"}),
    )
    client = FakeCatalogClient(
        products=[make_remote_product("prod_1", metadata=managed_metadata("pro"), prices=prices)],
    )
    resolver = _resolver(client, fields)

    found = resolver.find_price_by_internal_id("prod_1", "pro-m")

    assert found is not None
    assert found.id == "price_2"
    assert resolver.find_price_by_internal_id("prod_1", "pro-y") is None
    assert ("get", "prod_1") in client.calls


def test_list_managed_prices_only_yields_tagged_prices() -> None:
    fields = MetadataFields()
    prices = (
        make_remote_price("price_1", "prod_1", metadata=fields.price_tag("pro-m", "pro")),
        make_remote_price("price_2", "prod_1", metadata=managed_metadata("pro")),
    )
    client = FakeCatalogClient(
        products=[
            make_remote_product("prod_1", metadata=managed_metadata("pro"), prices=prices),
            make_remote_product(
                "prod_2",
                prices=(make_remote_price("price_3", "prod_2"),),
            ),
        ],
    )
    resolver = _resolver(client, fields)

    assert [price.id for price in resolver.list_managed_prices("org-1")] == ["price_1"]
    assert [price.id for price in resolver.list_managed_prices("org-1", include_all=True)] == [
        "price_1",
        "price_2",
        "price_3",
    ]


def test_snapshot_is_not_refreshed_after_creation() -> None:
    client = FakeCatalogClient(
        products=[make_remote_product("prod_1", metadata=managed_metadata("basic"))],
    )
    resolver = _resolver(client)
    snapshot = resolver.snapshot("org-1")

    client.products.append(make_remote_product("prod_2", metadata=managed_metadata("pro")))

    assert snapshot.find("basic") is not None
    assert snapshot.find("pro") is None


def test_snapshot_first_listed_match_wins() -> None:
    client = FakeCatalogClient(
        products=[
            make_remote_product("prod_1", metadata=managed_metadata("pro")),
            make_remote_product("prod_2", metadata=managed_metadata("pro")),
        ],
    )

    found = _resolver(client).snapshot("org-1").find("pro")

    assert found is not None
    assert found.id == "prod_1"
