"""Fake database adapters recording the order of mirror calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from plankit.domain.model import RemotePrice, RemoteProduct


@dataclass
class RecordingAdapter:
    calls: list[str] = field(default_factory=list)
    products: list[RemoteProduct] = field(default_factory=list)
    prices: list[RemotePrice] = field(default_factory=list)
    fail_on: str | None = None

    def sync_products(self, products: Sequence[RemoteProduct]) -> None:
        self._record("sync_products")
        self.products = list(products)

    def sync_prices(self, prices: Sequence[RemotePrice]) -> None:
        self._record("sync_prices")
        self.prices = list(prices)

    def clear_products(self) -> None:
        self._record("clear_products")
        self.products = []

    def clear_prices(self) -> None:
        self._record("clear_prices")
        self.prices = []

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if name == self.fail_on:
            raise RuntimeError(f"{name} failed")


class SyncOnlyAdapter:
    def sync_products(self, products: Sequence[RemoteProduct]) -> None:
        _ = products

    def sync_prices(self, prices: Sequence[RemotePrice]) -> None:
        _ = prices
