"""Ports for mirroring remote state into a local store.

The adapter contract is split into capability groups. Sync and purge each
require their group in full; reading the mirror back is optional.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from plankit.domain.errors import AdapterContractError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from plankit.domain.model import MirrorPrice, MirrorProduct, RemotePrice, RemoteProduct


@runtime_checkable
class MirrorSyncAdapter(Protocol):
    """Upsert remote state keyed by internal id."""

    def sync_products(self, products: Sequence[RemoteProduct]) -> None: ...

    def sync_prices(self, prices: Sequence[RemotePrice]) -> None: ...


@runtime_checkable
class MirrorPurgeAdapter(Protocol):
    """Unconditionally delete mirrored rows."""

    def clear_products(self) -> None: ...

    def clear_prices(self) -> None: ...


@runtime_checkable
class MirrorReader(Protocol):
    """Optional read-only introspection of the mirror."""

    def get_products(self) -> list[MirrorProduct]: ...

    def get_prices(self) -> list[MirrorPrice]: ...


@runtime_checkable
class DatabaseAdapter(MirrorSyncAdapter, MirrorPurgeAdapter, Protocol):
    """Full adapter contract: sync and purge groups."""


_GROUP_METHODS: dict[type, tuple[str, ...]] = {
    MirrorSyncAdapter: ("sync_products", "sync_prices"),
    MirrorPurgeAdapter: ("clear_products", "clear_prices"),
    MirrorReader: ("get_products", "get_prices"),
}


def missing_methods(adapter: object, group: type) -> list[str]:
    return [name for name in _GROUP_METHODS[group] if not callable(getattr(adapter, name, None))]


def supports(adapter: object, group: type) -> bool:
    return not missing_methods(adapter, group)


def require_capabilities(adapter: object, *groups: type) -> None:
    """Raise ``AdapterContractError`` naming every missing method of ``groups``."""

    missing = [name for group in groups for name in missing_methods(adapter, group)]
    if missing:
        raise AdapterContractError(adapter, missing)
