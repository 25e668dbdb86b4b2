"""Domain model for catalog reconciliation."""

from __future__ import annotations

from .catalog import DEFAULT_CURRENCY, Catalog, CatalogEntry, PriceSpec, ProductSpec, archive_ids
from .enums import AmountType, PriceType, RecurringInterval
from .metadata import (
    DEFAULT_MANAGED_BY_FIELD,
    DEFAULT_MANAGED_BY_VALUE,
    DEFAULT_PRICE_ID_FIELD,
    DEFAULT_PRODUCT_ID_FIELD,
    Metadata,
    MetadataFields,
    MetadataValue,
    metadata_text,
)
from .mirror import MirrorPrice, MirrorProduct, project_price, project_product
from .remote import RemotePrice, RemoteProduct

__all__ = [
    "DEFAULT_CURRENCY",
    "DEFAULT_MANAGED_BY_FIELD",
    "DEFAULT_MANAGED_BY_VALUE",
    "DEFAULT_PRICE_ID_FIELD",
    "DEFAULT_PRODUCT_ID_FIELD",
    "AmountType",
    "Catalog",
    "CatalogEntry",
    "Metadata",
    "MetadataFields",
    "MetadataValue",
    "MirrorPrice",
    "MirrorProduct",
    "PriceSpec",
    "PriceType",
    "ProductSpec",
    "RecurringInterval",
    "RemotePrice",
    "RemoteProduct",
    "archive_ids",
    "metadata_text",
    "project_price",
    "project_product",
]
