"""Translate catalog entries into remote create/update payloads."""

from __future__ import annotations

from typing import TYPE_CHECKING

from plankit.domain.model import DEFAULT_CURRENCY, AmountType, PriceType
from plankit.domain.ports import PriceCreate, ProductCreate, ProductUpdate

if TYPE_CHECKING:
    from plankit.domain.model import (
        CatalogEntry,
        MetadataFields,
        MetadataValue,
        PriceSpec,
        ProductSpec,
        RemoteProduct,
    )


def product_metadata(product: ProductSpec, fields: MetadataFields) -> dict[str, MetadataValue]:
    return fields.tagged(fields.product_tag(product.id), product.metadata)


def build_price_create(
    price: PriceSpec,
    *,
    product: ProductSpec,
    fields: MetadataFields,
) -> PriceCreate:
    price_type = price.price_type(product.recurring_interval)
    interval = None
    if price_type is PriceType.RECURRING:
        interval = price.recurring_interval or product.recurring_interval
    metadata = fields.tagged(fields.price_tag(price.id, product.id), price.metadata)

    match price.amount_type:
        case AmountType.FREE:
            return PriceCreate(
                amount_type=AmountType.FREE,
                price_type=price_type,
                recurring_interval=interval,
                metadata=metadata,
            )
        case AmountType.CUSTOM:
            return PriceCreate(
                amount_type=AmountType.CUSTOM,
                price_type=price_type,
                currency=price.currency or DEFAULT_CURRENCY,
                recurring_interval=interval,
                minimum_amount=price.minimum_amount,
                maximum_amount=price.maximum_amount,
                preset_amount=price.preset_amount,
                metadata=metadata,
            )
        case _:
            return PriceCreate(
                amount_type=AmountType.FIXED,
                price_type=price_type,
                currency=price.currency or DEFAULT_CURRENCY,
                amount=price.amount or 0,
                recurring_interval=interval,
                metadata=metadata,
            )


def build_product_create(
    entry: CatalogEntry,
    *,
    organization_id: str | None,
    fields: MetadataFields,
) -> ProductCreate:
    product = entry.product
    return ProductCreate(
        name=product.name,
        organization_id=organization_id,
        description=product.description,
        recurring_interval=product.recurring_interval,
        metadata=product_metadata(product, fields),
        prices=[
            build_price_create(price, product=product, fields=fields) for price in entry.prices
        ],
    )


def build_product_update(
    entry: CatalogEntry,
    remote: RemoteProduct,
    *,
    fields: MetadataFields,
) -> ProductUpdate:
    """Patch name and description; merge metadata over the remote map."""

    metadata: dict[str, MetadataValue] = dict(remote.metadata)
    metadata.update(product_metadata(entry.product, fields))
    return ProductUpdate(
        name=entry.product.name,
        description=entry.product.description,
        metadata=metadata,
    )


def archive_patch() -> ProductUpdate:
    return ProductUpdate(is_archived=True)
