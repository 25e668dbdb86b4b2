"""Resources as held by the remote catalog service."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from .enums import AmountType, PriceType, RecurringInterval

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .metadata import MetadataValue


@dataclass(frozen=True, slots=True)
class RemotePrice:
    id: str
    product_id: str
    amount_type: AmountType
    price_type: PriceType = PriceType.RECURRING
    currency: str | None = None
    amount: int | None = None
    recurring_interval: RecurringInterval | None = None
    is_archived: bool = False
    metadata: Mapping[str, MetadataValue] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True, slots=True)
class RemoteProduct:
    id: str
    name: str
    description: str | None = None
    is_archived: bool = False
    is_recurring: bool = False
    recurring_interval: RecurringInterval | None = None
    organization_id: str | None = None
    metadata: Mapping[str, MetadataValue] = field(default_factory=lambda: MappingProxyType({}))
    prices: tuple[RemotePrice, ...] = ()
