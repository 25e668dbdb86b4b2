"""Public interface for the Polar adapter."""

from __future__ import annotations

from .client import PolarAPIError, PolarClient
from .schema import ProductListResponse, ProductPayload
from .translator import parse_product

__all__ = [
    "PolarAPIError",
    "PolarClient",
    "ProductListResponse",
    "ProductPayload",
    "parse_product",
]
