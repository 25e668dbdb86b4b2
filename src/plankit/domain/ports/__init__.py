"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import (
    DatabaseAdapter,
    MirrorPurgeAdapter,
    MirrorReader,
    MirrorSyncAdapter,
    missing_methods,
    require_capabilities,
    supports,
)
from .remote import PriceCreate, ProductCreate, ProductPage, ProductUpdate, RemoteCatalogClient

__all__ = [
    "DatabaseAdapter",
    "MirrorPurgeAdapter",
    "MirrorReader",
    "MirrorSyncAdapter",
    "PriceCreate",
    "ProductCreate",
    "ProductPage",
    "ProductUpdate",
    "RemoteCatalogClient",
    "missing_methods",
    "require_capabilities",
    "supports",
]
