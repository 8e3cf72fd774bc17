"""Tests for decoding JSON into response models."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

import pytest
from pydantic import BaseModel, Field

from voip_client.errors import MalformedResponseError
from voip_client.responses import (
    BaseResponse,
    NumberValueDescription,
    RawResponse,
    StringValueDescription,
    decode_into,
)


class Countries(BaseResponse):
    countries: List[StringValueDescription] = Field(default_factory=list)


class Balance(BaseResponse):
    balance: Optional[NumberValueDescription] = None
    currency: str = Field(default="", alias="currency_code")


class Counted(BaseResponse):
    n: int = 0


class Required(BaseModel):
    id: str


@dataclass
class PlainRecord:
    id: str = ""


def test_decode_type_builds_instance() -> None:
    """Nested models and lists are decoded recursively."""
    data = {
        "status": "success",
        "countries": [
            {"value": "CA", "description": "Canada"},
            {"value": "US", "description": "United States"},
        ],
    }
    resp = decode_into(Countries, data)
    assert resp.ok
    assert resp.countries[1] == StringValueDescription(value="US", description="United States")


def test_number_value_keeps_exact_decimal() -> None:
    """Numeric values decode to Decimal without float rounding."""
    resp = decode_into(Balance, {"status": "success", "balance": {"value": Decimal("10.10"), "description": "USD"}})
    assert resp.balance.value == Decimal("10.10")
    assert str(resp.balance.value) == "10.10"


def test_number_value_accepts_plain_int_and_numeric_string() -> None:
    """Integers and numeric strings are accepted as numbers."""
    assert decode_into(NumberValueDescription, {"value": 3}).value == Decimal(3)
    assert decode_into(NumberValueDescription, {"value": "2.50"}).value == Decimal("2.50")


def test_alias_selects_json_key_and_unknown_keys_are_ignored() -> None:
    """Field aliases select the JSON key; extra keys don't matter."""
    resp = decode_into(Balance, {"status": "success", "currency_code": "CAD", "unexpected": 1})
    assert resp.currency == "CAD"
    assert resp.balance is None


def test_raw_response_keeps_every_key() -> None:
    """RawResponse carries the status plus all other keys."""
    resp = decode_into(RawResponse, {"status": "success", "balance": "1.00", "extra": [1]})
    assert resp.ok
    assert resp.model_dump() == {"status": "success", "balance": "1.00", "extra": [1]}


def test_decode_into_instance_updates_in_place() -> None:
    """An existing instance is populated and returned."""
    target = Balance(currency="USD")
    result = decode_into(target, {"status": "no_account"})
    assert result is target
    assert target.status == "no_account"
    assert target.currency == "USD"
    assert not target.ok


def test_decode_without_target_returns_data() -> None:
    """No target means the parsed JSON is returned unchanged."""
    data = {"status": "success", "anything": [1, 2]}
    assert decode_into(None, data) is data


def test_plain_dataclass_target() -> None:
    """Non-model types are validated too."""
    assert decode_into(PlainRecord, {"id": "7", "other": 1}) == PlainRecord(id="7")


@pytest.mark.parametrize(
    "data",
    [
        ["not", "an", "object"],
        {"status": 1},
        {"countries": {"value": "CA"}},
        {"countries": [{"value": 5}]},
    ],
)
def test_shape_mismatch_is_malformed(data) -> None:
    """Type mismatches raise MalformedResponseError."""
    with pytest.raises(MalformedResponseError):
        decode_into(Countries, data)


@pytest.mark.parametrize("value", [1.5, Decimal("1.5")])
def test_fractional_number_into_int_is_malformed(value) -> None:
    """Non-integral numbers are not truncated into int fields."""
    with pytest.raises(MalformedResponseError):
        decode_into(Counted, {"status": "success", "n": value})


def test_integral_number_into_int() -> None:
    """Whole numbers still decode into int fields."""
    assert decode_into(Counted, {"n": 4}).n == 4


def test_missing_required_field_is_malformed() -> None:
    """A required member absent from the body is reported."""
    with pytest.raises(MalformedResponseError):
        decode_into(Required, {})


def test_locally_declared_models_resolve() -> None:
    """Models declared inside a function may reference each other."""

    class Item(BaseModel):
        name: str = ""

    class Resp(BaseResponse):
        item: Item | None = None

    resp = decode_into(Resp, {"status": "success", "item": {"name": "did"}})
    assert resp.item.name == "did"


def test_unresolvable_annotation_is_type_error() -> None:
    """A model referencing an undefined type is a programming error, not a crash."""

    class Resp(BaseResponse):
        item: Undefined | None = None  # noqa: F821

    with pytest.raises(TypeError):
        decode_into(Resp, {"status": "success"})


def test_unsupported_target_is_type_error() -> None:
    """Targets must be types or model instances."""
    with pytest.raises(TypeError):
        decode_into(42, {})
