"""HTTP client for the Polar products API."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import BaseModel, ValidationError

from plankit.adapters.http_resilience import ResilientClient
from plankit.domain.errors import RemoteAPIError
from plankit.domain.ports import ProductPage, RemoteCatalogClient

from .schema import ErrorResponse, ProductListResponse, ProductPayload
from .translator import (
    parse_product,
    product_create_payload,
    product_update_payload,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from plankit.config.http_resilience import ResilienceConfig
    from plankit.config.polar import PolarConfig
    from plankit.domain.model import RemoteProduct
    from plankit.domain.ports import ProductCreate, ProductUpdate

log = getLogger(__name__)

PRODUCTS_PATH = "products/"


class PolarAPIError(RemoteAPIError):
    """Raised when the Polar API fails or returns an unexpected payload."""


class PolarClient:
    """Polar implementation of the remote catalog port.

    Every call runs on its own short-lived ``ResilientClient``, so retries and
    the configured rate limit apply within a single call. Consecutive calls,
    such as the pages of one listing, are not throttled against each other.
    """

    def __init__(
        self,
        *,
        config: PolarConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    def list_products(
        self,
        organization_id: str | None,
        *,
        page: int = 1,
        limit: int = 100,
    ) -> ProductPage:
        params: dict[str, str | int] = {"page": page, "limit": limit}
        if organization_id:
            params["organization_id"] = organization_id
        response = asyncio.run(self._request("GET", PRODUCTS_PATH, params=params))
        listing = self._parse(response, ProductListResponse)
        return ProductPage(
            items=[parse_product(item) for item in listing.items],
            page=page,
            max_page=listing.pagination.max_page,
        )

    def create_product(self, product: ProductCreate) -> RemoteProduct:
        body = product_create_payload(product).model_dump(mode="json", exclude_none=True)
        response = asyncio.run(self._request("POST", PRODUCTS_PATH, json=body))
        return parse_product(self._parse(response, ProductPayload))

    def update_product(self, remote_id: str, patch: ProductUpdate) -> RemoteProduct:
        body = product_update_payload(patch).model_dump(mode="json", exclude_none=True)
        response = asyncio.run(self._request("PATCH", f"{PRODUCTS_PATH}{remote_id}", json=body))
        return parse_product(self._parse(response, ProductPayload))

    def get_product(self, remote_id: str) -> RemoteProduct:
        response = asyncio.run(self._request("GET", f"{PRODUCTS_PATH}{remote_id}"))
        return parse_product(self._parse(response, ProductPayload))

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str | int] | None = None,
        json: object = None,
    ) -> object:
        if self._resilience.base_url is None:
            raise PolarAPIError("Missing Polar base_url in resilience configuration")
        try:
            async with self._client_factory(self._resilience) as client:
                if json is None:
                    response = await client.request(method, path, params=params)
                else:
                    response = await client.request(method, path, params=params, json=json)
        except httpx.HTTPError as exc:
            raise PolarAPIError(f"{method} {path} failed: {exc}") from exc

        if response.is_error:
            detail = _error_message(response)
            log.error(f"Polar API error {response.status_code} on {method} {path}: {detail}")
            raise PolarAPIError(
                f"{method} {path} returned {response.status_code}: {detail}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise PolarAPIError(f"{method} {path} returned a non-JSON body") from exc

    @staticmethod
    def _parse[TModel: BaseModel](payload: object, model: type[TModel]) -> TModel:
        if not isinstance(payload, dict):
            raise PolarAPIError("Unexpected Polar response payload")
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise PolarAPIError(f"Unexpected Polar response payload: {exc}") from exc


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(payload, dict):
        try:
            return ErrorResponse.model_validate(payload).message()
        except ValidationError:
            pass
    return str(payload)


if TYPE_CHECKING:

    def _client_check(config: PolarConfig) -> RemoteCatalogClient:
        return PolarClient(config=config)
