"""Translate Polar payloads into domain objects and back."""

from __future__ import annotations

from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING

from plankit.domain.model import AmountType, RemotePrice, RemoteProduct

from .schema import (
    PriceCreatePayload,
    PricePayload,
    ProductCreatePayload,
    ProductPayload,
    ProductUpdatePayload,
)

if TYPE_CHECKING:
    from plankit.domain.ports import PriceCreate, ProductCreate, ProductUpdate

log = getLogger(__name__)

_KNOWN_AMOUNT_TYPES = frozenset(item.value for item in AmountType)


def parse_price(payload: PricePayload, *, product_id: str) -> RemotePrice | None:
    if payload.amount_type not in _KNOWN_AMOUNT_TYPES:
        log.debug("Ignoring price %s with amount type %s", payload.id, payload.amount_type)
        return None
    return RemotePrice(
        id=payload.id,
        product_id=payload.product_id or product_id,
        amount_type=AmountType(payload.amount_type),
        price_type=payload.type,
        currency=payload.price_currency,
        amount=payload.price_amount,
        recurring_interval=payload.recurring_interval,
        is_archived=payload.is_archived,
        metadata=MappingProxyType(dict(payload.metadata)),
    )


def parse_product(payload: ProductPayload) -> RemoteProduct:
    prices = tuple(
        price
        for price in (parse_price(item, product_id=payload.id) for item in payload.prices)
        if price is not None
    )
    return RemoteProduct(
        id=payload.id,
        name=payload.name,
        description=payload.description,
        is_archived=payload.is_archived,
        is_recurring=payload.is_recurring,
        recurring_interval=payload.recurring_interval,
        organization_id=payload.organization_id,
        metadata=MappingProxyType(dict(payload.metadata)),
        prices=prices,
    )


def price_create_payload(price: PriceCreate) -> PriceCreatePayload:
    return PriceCreatePayload(
        amount_type=price.amount_type,
        type=price.price_type,
        price_currency=price.currency,
        price_amount=price.amount,
        minimum_amount=price.minimum_amount,
        maximum_amount=price.maximum_amount,
        preset_amount=price.preset_amount,
        recurring_interval=price.recurring_interval,
        metadata=dict(price.metadata) or None,
    )


def product_create_payload(product: ProductCreate) -> ProductCreatePayload:
    return ProductCreatePayload(
        name=product.name,
        organization_id=product.organization_id,
        description=product.description,
        recurring_interval=product.recurring_interval,
        metadata=dict(product.metadata),
        prices=[price_create_payload(price) for price in product.prices],
    )


def product_update_payload(patch: ProductUpdate) -> ProductUpdatePayload:
    return ProductUpdatePayload(
        name=patch.name,
        description=patch.description,
        metadata=dict(patch.metadata) if patch.metadata is not None else None,
        is_archived=patch.is_archived,
    )
