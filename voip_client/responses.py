"""
Response envelopes and JSON decoding for the VOIP API.

Response types are pydantic models. Types that carry the provider's "status"
field subclass BaseResponse; the client checks that field after every call.
Types without it simply don't subclass BaseResponse and are gated on the HTTP
status alone.

A field whose JSON key differs from its Python name declares it with
``Field(alias="callerid_number")``.

Classes:
    BaseResponse: Envelope exposing the logical status of a response.
    RawResponse: BaseResponse that keeps every key of the body.
    StringValueDescription: Value/description pair with a string value.
    NumberValueDescription: Value/description pair with an exact numeric value.

Functions:
    decode_into(target, data: Any):
        Validates parsed JSON against a model type, model instance or plain value.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, PydanticUserError, TypeAdapter, ValidationError

from .errors import MalformedResponseError

STATUS_SUCCESS = "success"


class BaseResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status: str = ""

    def get_status(self) -> str:
        return self.status

    @property
    def ok(self) -> bool:
        return self.status == STATUS_SUCCESS


class RawResponse(BaseResponse):
    """Keeps unknown keys so the whole body survives decoding."""

    model_config = ConfigDict(extra="allow")


class StringValueDescription(BaseModel):
    value: str = ""
    description: str = ""


class NumberValueDescription(BaseModel):
    value: Decimal = Decimal(0)
    description: str = ""


def _validate(target: Any, data: Any) -> Any:
    try:
        if isinstance(target, type) and issubclass(target, BaseModel):
            return target.model_validate(data)
        return TypeAdapter(target).validate_python(data)
    except ValidationError as e:
        name = getattr(target, "__name__", repr(target))
        raise MalformedResponseError(f"response does not match {name}: {e}") from e
    except (PydanticUserError, NameError) as e:
        raise TypeError(f"cannot decode into {target!r}: {e}") from e


def decode_into(target: Any, data: Any) -> Any:
    """Decode parsed JSON into ``target``.

    A type is validated into a new value, a model instance is updated in place
    (keys missing from ``data`` keep their current values) and ``None`` returns
    ``data`` unchanged. Unknown keys are ignored.
    """
    if target is None:
        return data
    if isinstance(target, BaseModel):
        decoded = _validate(type(target), data)
        for name in decoded.model_fields_set:
            setattr(target, name, getattr(decoded, name))
        return target
    return _validate(target, data)
