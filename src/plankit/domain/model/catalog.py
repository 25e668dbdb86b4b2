"""Declared catalog entries (the desired state)."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from .enums import AmountType, PriceType, RecurringInterval
from .metadata import MetadataFields

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from .metadata import MetadataValue

DEFAULT_CURRENCY = "usd"


def _frozen_metadata(
    metadata: Mapping[str, MetadataValue] | None,
) -> Mapping[str, MetadataValue]:
    return MappingProxyType(dict(metadata or {}))


@dataclass(frozen=True, slots=True)
class PriceSpec:
    """One declared price of a catalog entry. Amounts are in minor units."""

    id: str
    amount_type: AmountType = AmountType.FIXED
    currency: str = DEFAULT_CURRENCY
    amount: int | None = None
    recurring_interval: RecurringInterval | None = None
    minimum_amount: int | None = None
    maximum_amount: int | None = None
    preset_amount: int | None = None
    metadata: Mapping[str, MetadataValue] = field(default_factory=lambda: _frozen_metadata(None))

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Price internal id must not be empty")
        if self.amount is not None and self.amount < 0:
            raise ValueError(f"Price {self.id} has a negative amount")
        object.__setattr__(self, "metadata", _frozen_metadata(self.metadata))

    def price_type(self, product_interval: RecurringInterval | None = None) -> PriceType:
        if self.recurring_interval or product_interval:
            return PriceType.RECURRING
        return PriceType.ONE_TIME


@dataclass(frozen=True, slots=True)
class ProductSpec:
    id: str
    name: str
    description: str | None = None
    recurring_interval: RecurringInterval | None = None
    metadata: Mapping[str, MetadataValue] = field(default_factory=lambda: _frozen_metadata(None))

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Product internal id must not be empty")
        if not self.name:
            raise ValueError(f"Product {self.id} must have a name")
        object.__setattr__(self, "metadata", _frozen_metadata(self.metadata))


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """A product together with the prices it is created with."""

    product: ProductSpec
    prices: tuple[PriceSpec, ...]

    def __post_init__(self) -> None:
        if not self.prices:
            raise ValueError(f"Catalog entry {self.product.id} declares no prices")

    @property
    def internal_id(self) -> str:
        return self.product.id


@dataclass(frozen=True, slots=True)
class Catalog:
    """A validated set of catalog entries plus the tagging configuration."""

    entries: tuple[CatalogEntry, ...]
    fields: MetadataFields = field(default_factory=MetadataFields)
    archive_product_ids: Mapping[str, str] | None = None

    def __post_init__(self) -> None:
        _ensure_unique(entry.product.id for entry in self.entries)
        _ensure_unique(price.id for entry in self.entries for price in entry.prices)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self.entries)


def archive_ids(catalog: Catalog) -> list[str]:
    """Internal product ids targeted by an archive run.

    The explicit ``archive_product_ids`` map wins when it is present; otherwise
    every catalog entry is targeted. Order is preserved and duplicates dropped.
    """

    if catalog.archive_product_ids is not None:
        candidates: Iterable[str] = catalog.archive_product_ids.values()
    else:
        candidates = (entry.product.id for entry in catalog.entries)
    return list(dict.fromkeys(value for value in candidates if value))


def _ensure_unique(ids: Iterable[str]) -> None:
    seen: set[str] = set()
    duplicates: list[str] = []
    for value in ids:
        if value in seen:
            duplicates.append(value)
        seen.add(value)
    if duplicates:
        raise ValueError(f"Duplicate internal ids: {', '.join(sorted(set(duplicates)))}")
