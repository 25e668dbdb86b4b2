"""Catalog file loading.

A catalog file (TOML or JSON) lists plans in the flat shape: product fields,
a ``prices`` array and a ``metadata`` table. The internal product id lives in
the metadata under the configured product id field, which is the same key the
remote resources are tagged with. Keys are accepted in snake_case or
camelCase.
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from plankit.domain.model import (
    DEFAULT_CURRENCY,
    DEFAULT_MANAGED_BY_FIELD,
    DEFAULT_MANAGED_BY_VALUE,
    DEFAULT_PRICE_ID_FIELD,
    DEFAULT_PRODUCT_ID_FIELD,
    AmountType,
    Catalog,
    CatalogEntry,
    MetadataFields,
    PriceSpec,
    ProductSpec,
    RecurringInterval,
    metadata_text,
)

from .errors import ConfigurationError

if TYPE_CHECKING:
    from plankit.domain.model import MetadataValue

MetadataModelValue = str | int | float | bool


class CatalogBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, alias_generator=to_camel)


class MetadataFieldsModel(CatalogBaseModel):
    product_id_field: str = Field(default=DEFAULT_PRODUCT_ID_FIELD, min_length=1)
    price_id_field: str = Field(default=DEFAULT_PRICE_ID_FIELD, min_length=1)
    managed_by_field: str = Field(default=DEFAULT_MANAGED_BY_FIELD, min_length=1)
    managed_by_value: str = Field(default=DEFAULT_MANAGED_BY_VALUE, min_length=1)


class PriceModel(CatalogBaseModel):
    id: str | None = None
    amount_type: AmountType = AmountType.FIXED
    price_currency: str = Field(default=DEFAULT_CURRENCY, min_length=3, max_length=3)
    price_amount: int | None = Field(default=None, ge=0)
    minimum_amount: int | None = Field(default=None, ge=0)
    maximum_amount: int | None = Field(default=None, ge=0)
    preset_amount: int | None = Field(default=None, ge=0)
    recurring_interval: RecurringInterval | None = None
    metadata: dict[str, MetadataModelValue] = Field(default_factory=dict)


class PlanModel(CatalogBaseModel):
    name: str = Field(min_length=1)
    description: str | None = None
    recurring_interval: RecurringInterval | None = None
    prices: list[PriceModel] = Field(min_length=1)
    metadata: dict[str, MetadataModelValue] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _reject_nested_shape(cls, value: object) -> object:
        if isinstance(value, dict) and "product" in value:
            raise ValueError(
                "nested {product, prices} plans are not supported; move the product "
                "fields to the plan and its id into the plan metadata"
            )
        return value


class CatalogFile(CatalogBaseModel):
    plans: list[PlanModel] = Field(default_factory=list)
    metadata: MetadataFieldsModel = Field(default_factory=MetadataFieldsModel)
    product_ids: dict[str, str] | None = None


def _read_document(path: Path) -> object:
    try:
        if path.suffix.lower() == ".toml":
            with path.open("rb") as handle:
                return tomllib.load(handle)
        with path.open(encoding="utf-8") as handle:
            return json.load(handle)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Catalog file not found: {path}") from exc
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Catalog file {path} is not valid: {exc}") from exc


def parse_catalog(document: object, *, source: str = "<catalog>") -> Catalog:
    """Validate a decoded catalog document and build the domain ``Catalog``."""

    try:
        parsed = CatalogFile.model_validate(document)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid catalog {source}: {exc}") from exc

    fields = MetadataFields(
        product_id_field=parsed.metadata.product_id_field,
        price_id_field=parsed.metadata.price_id_field,
        managed_by_field=parsed.metadata.managed_by_field,
        managed_by_value=parsed.metadata.managed_by_value,
    )
    if not parsed.plans:
        raise ConfigurationError(f"No plans configured in {source}")

    try:
        entries = tuple(
            _build_entry(plan, fields, position) for position, plan in enumerate(parsed.plans, 1)
        )
        return Catalog(
            entries=entries,
            fields=fields,
            archive_product_ids=parsed.product_ids,
        )
    except ValueError as exc:
        raise ConfigurationError(f"Invalid catalog {source}: {exc}") from exc


def load_catalog(path: str | Path) -> Catalog:
    catalog_path = Path(path).expanduser()
    return parse_catalog(_read_document(catalog_path), source=str(catalog_path))


def _build_entry(plan: PlanModel, fields: MetadataFields, position: int) -> CatalogEntry:
    metadata: dict[str, MetadataValue] = dict(plan.metadata)
    internal_id = metadata_text(metadata, fields.product_id_field)
    if internal_id is None:
        raise ValueError(
            f"plan #{position} ({plan.name}) has no string metadata.{fields.product_id_field}"
        )
    product = ProductSpec(
        id=internal_id,
        name=plan.name,
        description=plan.description,
        recurring_interval=plan.recurring_interval,
        metadata=metadata,
    )
    prices = tuple(
        _build_price(price, internal_id, fields, index)
        for index, price in enumerate(plan.prices, 1)
    )
    return CatalogEntry(product=product, prices=prices)


def _build_price(
    price: PriceModel,
    internal_product_id: str,
    fields: MetadataFields,
    index: int,
) -> PriceSpec:
    price_id = (
        price.id
        or metadata_text(price.metadata, fields.price_id_field)
        or f"{internal_product_id}-price-{index}"
    )
    return PriceSpec(
        id=price_id,
        amount_type=price.amount_type,
        currency=price.price_currency.lower(),
        amount=price.price_amount,
        recurring_interval=price.recurring_interval,
        minimum_amount=price.minimum_amount,
        maximum_amount=price.maximum_amount,
        preset_amount=price.preset_amount,
        metadata=dict(price.metadata),
    )
