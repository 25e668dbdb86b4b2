from __future__ import annotations

from plankit.adapters.polar import ProductPayload, parse_product
from plankit.adapters.polar.translator import product_update_payload
from plankit.domain.model import AmountType, PriceType
from plankit.domain.ports import ProductUpdate


def test_parse_product_normalizes_missing_metadata() -> None:
    payload = ProductPayload.model_validate(
        {
            "id": "prod_1",
            "name": "Lifetime",
            "metadata": None,
            "prices": [
                {"id": "price_1", "amount_type": "free", "type": "one_time", "metadata": None},
            ],
        }
    )

    product = parse_product(payload)

    assert product.metadata == {}
    assert product.recurring_interval is None
    (price,) = product.prices
    assert price.product_id == "prod_1"
    assert price.amount_type is AmountType.FREE
    assert price.price_type is PriceType.ONE_TIME


def test_parse_product_keeps_mixed_metadata_values() -> None:
    payload = ProductPayload.model_validate(
        {
            "id": "prod_1",
            "name": "Pro",
            "metadata": {"internal_product_id": "pro", "seats": 5, "beta": True},
        }
    )

    product = parse_product(payload)

    assert product.metadata["seats"] == 5
    assert product.metadata["beta"] is True


def test_update_payload_leaves_unset_fields_out() -> None:
    payload = product_update_payload(ProductUpdate(name="Pro"))

    assert payload.model_dump(mode="json", exclude_none=True) == {"name": "Pro"}
