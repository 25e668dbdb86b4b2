"""Pydantic models describing the Polar API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from plankit.domain.model import AmountType, PriceType, RecurringInterval

MetadataPayloadValue = str | int | float | bool


def _none_to_empty(value: object) -> object:
    return {} if value is None else value


class PolarBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PricePayload(PolarBaseModel):
    id: str
    product_id: str | None = None
    # kept as text: the API knows more amount types than the catalog declares
    amount_type: str
    type: PriceType = PriceType.RECURRING
    is_archived: bool = False
    price_currency: str | None = None
    price_amount: int | None = None
    recurring_interval: RecurringInterval | None = None
    metadata: dict[str, MetadataPayloadValue] = Field(default_factory=dict)

    _normalize_metadata = field_validator("metadata", mode="before")(_none_to_empty)


class ProductPayload(PolarBaseModel):
    id: str
    name: str
    description: str | None = None
    is_recurring: bool = False
    is_archived: bool = False
    organization_id: str | None = None
    recurring_interval: RecurringInterval | None = None
    metadata: dict[str, MetadataPayloadValue] = Field(default_factory=dict)
    prices: list[PricePayload] = Field(default_factory=list)

    _normalize_metadata = field_validator("metadata", mode="before")(_none_to_empty)


class Pagination(PolarBaseModel):
    total_count: int
    max_page: int


class ProductListResponse(PolarBaseModel):
    items: list[ProductPayload]
    pagination: Pagination


class PriceCreatePayload(PolarBaseModel):
    amount_type: AmountType
    type: PriceType
    price_currency: str | None = None
    price_amount: int | None = None
    minimum_amount: int | None = None
    maximum_amount: int | None = None
    preset_amount: int | None = None
    recurring_interval: RecurringInterval | None = None
    metadata: dict[str, MetadataPayloadValue] | None = None


class ProductCreatePayload(PolarBaseModel):
    name: str
    organization_id: str | None = None
    description: str | None = None
    recurring_interval: RecurringInterval | None = None
    metadata: dict[str, MetadataPayloadValue] = Field(default_factory=dict)
    prices: list[PriceCreatePayload]


class ProductUpdatePayload(PolarBaseModel):
    name: str | None = None
    description: str | None = None
    metadata: dict[str, MetadataPayloadValue] | None = None
    is_archived: bool | None = None


class ErrorResponse(PolarBaseModel):
    error: str | None = None
    detail: object = None

    def message(self) -> str:
        if isinstance(self.detail, str):
            return self.detail
        if isinstance(self.detail, list):
            return "; ".join(str(item) for item in self.detail)
        return self.error or "Unknown Polar API error"
