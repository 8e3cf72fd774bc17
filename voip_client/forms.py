"""
Multipart form encoding for POST payloads.

Payloads are flat dataclasses or pydantic models whose members are all
strings (or plain mappings of string to string). Each member becomes one
form field.

A dataclass member may declare its form name through field metadata, e.g.
``field(default="", metadata={"json": "callerid,omitempty"})``; anything after
the first comma is a qualifier and is ignored. Pydantic members use their
alias.

Classes:
    FormWriter: Collects form fields in order and hands them to httpx as multipart parts.

Functions:
    field_name(f: Field) -> str:
        Returns the form field name of a dataclass member.

    iter_payload(payload) -> Iterator[Tuple[str, Any]]:
        Yields (name, value) pairs for every member of a payload.

    write_payload(writer: FormWriter, payload, reserved=()):
        Writes every member of a payload to the writer, aborting on the first failure.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any, Collection, Iterator, List, Optional, Tuple

from pydantic import BaseModel

from .errors import EncodingError, ReservedParameterError


class FormWriter:
    def __init__(self):
        self._fields: List[Tuple[str, str]] = []

    def write_field(self, name: str, value: Any):
        if not isinstance(name, str) or not name:
            raise EncodingError(f"invalid form field name {name!r}", field=str(name))
        if not isinstance(value, str):
            raise EncodingError(
                f"form field {name!r} must be a string, got {type(value).__name__}", field=name)
        self._fields.append((name, value))

    @property
    def fields(self) -> List[Tuple[str, str]]:
        return list(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def to_files(self) -> List[Tuple[str, Tuple[None, bytes]]]:
        # No filename on any part, so httpx renders them as plain form-data fields.
        return [(name, (None, value.encode("utf-8"))) for name, value in self._fields]


def json_name(f: dataclasses.Field) -> Optional[str]:
    tag = f.metadata.get("json")
    if not tag:
        return None
    return tag.split(",", 1)[0] or None


def field_name(f: dataclasses.Field) -> str:
    return json_name(f) or f.name.lower()


def iter_payload(payload: Any) -> Iterator[Tuple[str, Any]]:
    if payload is None:
        return
    if isinstance(payload, Mapping):
        yield from payload.items()
        return
    if isinstance(payload, BaseModel):
        for name, info in type(payload).model_fields.items():
            yield info.alias or name.lower(), getattr(payload, name)
        return
    if not dataclasses.is_dataclass(payload) or isinstance(payload, type):
        raise EncodingError(
            f"payload must be a dataclass, model instance or mapping, got {type(payload).__name__}")
    for f in dataclasses.fields(payload):
        yield field_name(f), getattr(payload, f.name)


def write_payload(writer: FormWriter, payload: Any, reserved: Collection[str] = ()):
    """Append one form field per payload member.

    Names listed in ``reserved`` are refused. Fields written before a failure
    stay in the writer.
    """
    for name, value in iter_payload(payload):
        if name in reserved:
            raise ReservedParameterError(f"form field {name!r} is set by the client")
        writer.write_field(name, value)
