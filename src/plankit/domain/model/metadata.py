"""Metadata values and the ownership tag protocol.

Remote resources carry a free-form metadata map. Two keys of that map form the
ownership tag that links a remote product or price to a catalog entry: the
internal id field and the managed-by field. Comparisons are strict: a tag value
only matches when it is a non-empty ``str`` equal to the expected value, so a
boolean ``True`` never satisfies ``"true"`` and ``1`` never satisfies ``"1"``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Mapping

type MetadataValue = str | int | float | bool
type Metadata = Mapping[str, MetadataValue]

DEFAULT_PRODUCT_ID_FIELD: Final[str] = "internal_product_id"
DEFAULT_PRICE_ID_FIELD: Final[str] = "internal_price_id"
DEFAULT_MANAGED_BY_FIELD: Final[str] = "managed_by"
DEFAULT_MANAGED_BY_VALUE: Final[str] = "plankit"


def metadata_text(metadata: Metadata | None, key: str) -> str | None:
    """Return ``metadata[key]`` when it is a non-empty string, else ``None``."""

    if not metadata:
        return None
    value = metadata.get(key)
    if isinstance(value, str) and value:
        return value
    return None


@dataclass(frozen=True, slots=True)
class MetadataFields:
    """Names of the metadata keys forming the ownership tag."""

    product_id_field: str = DEFAULT_PRODUCT_ID_FIELD
    price_id_field: str = DEFAULT_PRICE_ID_FIELD
    managed_by_field: str = DEFAULT_MANAGED_BY_FIELD
    managed_by_value: str = DEFAULT_MANAGED_BY_VALUE

    def product_tag(self, internal_product_id: str) -> dict[str, MetadataValue]:
        return {
            self.product_id_field: internal_product_id,
            self.managed_by_field: self.managed_by_value,
        }

    def price_tag(
        self, internal_price_id: str, internal_product_id: str
    ) -> dict[str, MetadataValue]:
        return {
            self.price_id_field: internal_price_id,
            self.product_id_field: internal_product_id,
            self.managed_by_field: self.managed_by_value,
        }

    def is_owned(self, metadata: Metadata | None) -> bool:
        return metadata_text(metadata, self.managed_by_field) == self.managed_by_value

    def is_managed_product(self, metadata: Metadata | None) -> bool:
        return self.is_owned(metadata) and self.internal_product_id(metadata) is not None

    def is_managed_price(self, metadata: Metadata | None) -> bool:
        return self.is_owned(metadata) and self.internal_price_id(metadata) is not None

    def internal_product_id(self, metadata: Metadata | None) -> str | None:
        return metadata_text(metadata, self.product_id_field)

    def internal_price_id(self, metadata: Metadata | None) -> str | None:
        return metadata_text(metadata, self.price_id_field)

    def tagged(
        self,
        tag: Mapping[str, MetadataValue],
        extra: Metadata | None = None,
    ) -> dict[str, MetadataValue]:
        """Merge ``extra`` over ``tag`` while keeping the tag keys authoritative."""

        merged: dict[str, MetadataValue] = dict(tag)
        if extra:
            merged.update(extra)
        merged.update(tag)
        return merged
