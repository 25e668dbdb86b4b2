"""Reconciliation of catalog entries with the remote catalog service."""

from __future__ import annotations

from .engine import (
    ArchiveResult,
    CreateResult,
    FailedEntry,
    ReconciliationEngine,
    ResolvedProduct,
    UpdateResult,
)
from .payloads import build_price_create, build_product_create, build_product_update
from .resolve import IdentityResolver, ListingSnapshot

__all__ = [
    "ArchiveResult",
    "CreateResult",
    "FailedEntry",
    "IdentityResolver",
    "ListingSnapshot",
    "ReconciliationEngine",
    "ResolvedProduct",
    "UpdateResult",
    "build_price_create",
    "build_product_create",
    "build_product_update",
]
