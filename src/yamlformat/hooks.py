"""Conversion hooks and structural fallbacks.

A type takes control of its own representation by implementing
``to_data()`` (encode) or a ``from_data(data)`` classmethod (decode).
Everything else goes through structural reflection: pydantic models,
dataclasses, enums, and the abstract collection types.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence, Set
from enum import Enum
from typing import Any, Protocol, get_origin, runtime_checkable

from pydantic import BaseModel, PydanticSchemaGenerationError, TypeAdapter, ValidationError


@runtime_checkable
class DataMarshaler(Protocol):
    """Value that converts itself to plain data before encoding."""

    def to_data(self) -> Any: ...


@runtime_checkable
class DataUnmarshaler(Protocol):
    """Type that builds itself from decoded plain data."""

    @classmethod
    def from_data(cls, data: Any) -> Any: ...


def has_marshal_hook(value: Any) -> bool:
    return not isinstance(value, type) and isinstance(value, DataMarshaler)


def has_unmarshal_hook(target: type) -> bool:
    return isinstance(target, DataUnmarshaler)


def reflect(value: Any) -> Any:
    """Return a plain-data view of *value*, or ``NotImplemented``."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, Set):
        return sorted(value, key=str)
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return list(value)
    return NotImplemented


def is_type_target(target: Any) -> bool:
    """True for classes and parameterized generics such as ``list[int]``."""
    return isinstance(target, type) or get_origin(target) is not None


def build_target(target: Any, data: Any, *, use_hooks: bool) -> Any:
    """Construct an instance of *target* from decoded *data*.

    A ``from_data`` hook wins when hooks are enabled. Pydantic models are
    validated with ``model_validate`` and their ``ValidationError``
    propagates. Everything else goes through a pydantic ``TypeAdapter``,
    which coerces lax input such as ``100`` for a ``float`` target.

    Raises:
        TypeError: If *data* cannot populate *target*.
    """
    if get_origin(target) is None and isinstance(target, type):
        if use_hooks and has_unmarshal_hook(target):
            return target.from_data(data)  # type: ignore[attr-defined]
        if issubclass(target, BaseModel):
            return target.model_validate(data)
        if isinstance(data, target):
            return data
    try:
        return TypeAdapter(target).validate_python(data)
    except (PydanticSchemaGenerationError, ValidationError) as exc:
        msg = f"Cannot decode {type(data).__name__} into {_type_name(target)}"
        raise TypeError(msg) from exc


def _type_name(target: Any) -> str:
    return getattr(target, "__name__", None) or repr(target)
