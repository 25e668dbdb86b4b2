"""Create, update and archive catalog entries against the remote service.

Every operation takes one listing snapshot up front and makes all of its
decisions against it. Products created during a run are not visible to later
entries of the same run; duplicate protection inside a run relies on the
catalog's internal ids being unique.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from plankit.domain.errors import RemoteAPIError

from .payloads import archive_patch, build_product_create, build_product_update

if TYPE_CHECKING:
    from collections.abc import Iterable

    from plankit.domain.model import CatalogEntry, RemotePrice
    from plankit.domain.ports import RemoteCatalogClient

    from .resolve import IdentityResolver

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedProduct:
    internal_id: str
    remote_id: str


@dataclass(frozen=True, slots=True)
class FailedEntry:
    internal_id: str
    error: str


@dataclass(slots=True)
class CreateResult:
    created: list[ResolvedProduct] = field(default_factory=list)
    existing: list[ResolvedProduct] = field(default_factory=list)
    failed: list[FailedEntry] = field(default_factory=list)

    def summary(self) -> str:
        return (
            f"created={len(self.created)}, existing={len(self.existing)}, "
            f"failed={len(self.failed)}"
        )


@dataclass(slots=True)
class UpdateResult:
    updated: list[ResolvedProduct] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    prices_verified: list[str] = field(default_factory=list)
    prices_missing: list[str] = field(default_factory=list)

    def summary(self) -> str:
        return (
            f"updated={len(self.updated)}, skipped={len(self.skipped)}, "
            f"prices_verified={len(self.prices_verified)}, "
            f"prices_missing={len(self.prices_missing)}"
        )


@dataclass(slots=True)
class ArchiveResult:
    archived: list[ResolvedProduct] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    cascaded_prices: list[RemotePrice] = field(default_factory=list)

    def summary(self) -> str:
        return (
            f"archived={len(self.archived)}, skipped={len(self.skipped)}, "
            f"cascaded_prices={len(self.cascaded_prices)}"
        )


@dataclass(slots=True)
class ReconciliationEngine:
    client: RemoteCatalogClient
    resolver: IdentityResolver

    def create(
        self,
        entries: Iterable[CatalogEntry],
        organization_id: str | None,
    ) -> CreateResult:
        """Ensure a managed remote product exists for every entry.

        Remote failures are recorded per entry and do not stop the run, so a
        second run only retries what is still missing.
        """

        fields = self.resolver.fields
        snapshot = self.resolver.snapshot(organization_id)
        result = CreateResult()

        for entry in entries:
            log.info("Processing %s (internal id %s)", entry.product.name, entry.internal_id)
            existing = snapshot.find(entry.internal_id)
            if existing is not None:
                log.info("  Product found: %s (remote id %s)", existing.name, existing.id)
                result.existing.append(ResolvedProduct(entry.internal_id, existing.id))
                continue

            log.info("  Product not found remotely, creating")
            payload = build_product_create(entry, organization_id=organization_id, fields=fields)
            try:
                created = self.client.create_product(payload)
            except RemoteAPIError as exc:
                log.error("  Failed to create product %s: %s", entry.internal_id, exc)
                result.failed.append(FailedEntry(entry.internal_id, str(exc)))
                continue

            log.info("  Created product: %s (remote id %s)", created.name, created.id)
            for price in created.prices:
                log.info("    Price created: %s (%s)", price.id, price.amount_type)
            result.created.append(ResolvedProduct(entry.internal_id, created.id))

        if not result.created:
            log.warning("No products were created")
        return result

    def update(
        self,
        entries: Iterable[CatalogEntry],
        organization_id: str | None,
    ) -> UpdateResult:
        """Push name, description and metadata of existing managed products.

        Entries without a managed remote product are skipped; update never
        creates. Prices are only checked for existence.
        """

        fields = self.resolver.fields
        snapshot = self.resolver.snapshot(organization_id)
        result = UpdateResult()

        for entry in entries:
            remote = snapshot.find(entry.internal_id)
            if remote is None:
                log.warning("Remote product not found for %s, skipping update", entry.internal_id)
                result.skipped.append(entry.internal_id)
                continue

            patch = build_product_update(entry, remote, fields=fields)
            updated = self.client.update_product(remote.id, patch)
            log.info("Updated product %s (remote id %s)", entry.internal_id, updated.id)
            result.updated.append(ResolvedProduct(entry.internal_id, updated.id))

            for price in entry.prices:
                remote_price = self.resolver.find_price_by_internal_id(remote.id, price.id)
                if remote_price is None:
                    log.warning("Remote price not found for %s, skipping", price.id)
                    result.prices_missing.append(price.id)
                    continue
                log.info(
                    "Found remote price %s for %s (price updates are not supported remotely)",
                    remote_price.id,
                    price.id,
                )
                result.prices_verified.append(price.id)

        return result

    def archive(
        self,
        internal_ids: Iterable[str],
        organization_id: str | None,
    ) -> ArchiveResult:
        """Archive the managed products matching ``internal_ids``.

        Prices are archived by the remote service together with their product;
        the result only reports which managed prices were affected.
        """

        ids = list(dict.fromkeys(internal_ids))
        result = ArchiveResult()
        if not ids:
            log.info("No product ids provided for archiving")
            return result

        log.info("Archiving %s products", len(ids))
        snapshot = self.resolver.snapshot(organization_id)

        for internal_id in ids:
            remote = snapshot.find(internal_id)
            if remote is None:
                log.info("Product not found remotely: %s", internal_id)
                result.skipped.append(internal_id)
                continue
            self.client.update_product(remote.id, archive_patch())
            log.info("Archived product %s (internal id %s)", remote.id, internal_id)
            result.archived.append(ResolvedProduct(internal_id, remote.id))

        archived_ids = {item.internal_id for item in result.archived}
        result.cascaded_prices = snapshot.prices_for(archived_ids)
        if result.cascaded_prices:
            log.info(
                "%s managed prices are archived along with their products",
                len(result.cascaded_prices),
            )
        if not result.archived:
            log.info("No products were archived")
        return result
