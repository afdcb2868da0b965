"""ruamel.yaml representer that applies an :class:`EncodePolicy`.

The policy is bound per call with :meth:`CanonicalRepresenter.bind`, which
returns a throwaway subclass; the base class and its registries are never
touched after import.
"""

from __future__ import annotations

import base64
import re
from collections import OrderedDict
from datetime import date, datetime
from typing import Any, ClassVar

from ruamel.yaml.nodes import Node, ScalarNode
from ruamel.yaml.representer import RepresenterError, SafeRepresenter
from ruamel.yaml.resolver import VersionedResolver

from yamlformat.hooks import has_marshal_hook, reflect
from yamlformat.numeric import canonical_float, is_integral
from yamlformat.options import EncodePolicy, Formatter

_INT_TEXT = re.compile(r"^[-+]?[0-9]+$")

STR_TAG = "tag:yaml.org,2002:str"
INT_TAG = "tag:yaml.org,2002:int"
MAP_TAG = "tag:yaml.org,2002:map"


class CanonicalRepresenter(SafeRepresenter):
    """Safe representer with sorted keys, auto-int and literal multi-line strings."""

    policy: ClassVar[EncodePolicy] = EncodePolicy()

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._resolver = VersionedResolver()

    @classmethod
    def bind(cls, policy: EncodePolicy) -> type[CanonicalRepresenter]:
        return type(cls.__name__, (cls,), {"policy": policy})

    def ignore_aliases(self, data: Any) -> bool:
        return True

    def represent_data(self, data: Any) -> Node:
        if self.policy.use_hooks and has_marshal_hook(data):
            return self.represent_data(data.to_data())
        if not isinstance(data, float):
            formatter = self.policy.formatter_for(data)
            if formatter is not None:
                return self._represent_formatted(data, formatter)
        return super().represent_data(data)

    def represent_str(self, data: str) -> Node:
        style: str | None = None
        if self.policy.json_shape:
            style = '"'
        elif self.policy.literal_multiline and "\n" in data:
            style = "|"
        return self.represent_scalar(STR_TAG, data, style=style)

    def represent_float(self, data: float) -> Node:
        if self.policy.auto_int and is_integral(data):
            return self.represent_scalar(INT_TAG, canonical_float(data))
        formatter = self.policy.formatter_for(data)
        if formatter is None:
            return super().represent_float(data)
        return self._represent_formatted(data, formatter)

    def represent_dict(self, data: Any) -> Node:
        items = list(data.items())
        if self.policy.json_shape:
            items = [(_json_key(key), value) for key, value in items]
            _check_unique_keys(data, items)
        if self.policy.sort_keys:
            items.sort(key=lambda item: str(item[0]))
        return self.represent_mapping(MAP_TAG, items)

    # JSON has no timestamp, set or binary types; fall back to strings and lists.

    def represent_date(self, data: Any) -> Node:
        if self.policy.json_shape:
            return self.represent_str(data.isoformat())
        return super().represent_date(data)

    def represent_datetime(self, data: Any) -> Node:
        if self.policy.json_shape:
            return self.represent_str(data.isoformat())
        return super().represent_datetime(data)

    def represent_set(self, data: Any) -> Node:
        if self.policy.json_shape:
            return self.represent_list(sorted(data, key=str))
        return super().represent_set(data)

    def represent_binary(self, data: Any) -> Node:
        if self.policy.json_shape:
            return self.represent_str(base64.b64encode(data).decode("ascii"))
        return super().represent_binary(data)

    def represent_fallback(self, data: Any) -> Node:
        """Anything without an exact-type representer lands here."""
        structure = reflect(data)
        if structure is not NotImplemented:
            return self.represent_data(structure)
        if isinstance(data, bool):
            return self.represent_bool(data)
        if isinstance(data, float):
            return self.represent_float(data)
        if isinstance(data, int):
            return self.represent_int(int(data))
        if isinstance(data, str):
            return self.represent_str(str(data))
        return self.represent_undefined(data)

    def _represent_formatted(self, data: Any, formatter: Formatter) -> Node:
        """Emit formatter output as a plain scalar, tagged as the resolver reads it."""
        text = formatter(data)
        # keep floats floats when auto-int did not claim them
        if isinstance(data, float) and _INT_TEXT.match(text):
            text = f"{text}.0"
        tag = self._resolver.resolve(ScalarNode, text, (True, False))
        return self.represent_scalar(tag, text)


def _json_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    if isinstance(key, float):
        return canonical_float(key)
    return str(key)


def _check_unique_keys(data: Any, items: list[tuple[str, Any]]) -> None:
    seen: dict[str, Any] = {}
    for (key, _), original in zip(items, data, strict=True):
        if key in seen:
            msg = f"JSON keys {seen[key]!r} and {original!r} both render as {key!r}"
            raise RepresenterError(msg)
        seen[key] = original


CanonicalRepresenter.add_representer(str, CanonicalRepresenter.represent_str)
CanonicalRepresenter.add_representer(float, CanonicalRepresenter.represent_float)
CanonicalRepresenter.add_representer(dict, CanonicalRepresenter.represent_dict)
CanonicalRepresenter.add_representer(OrderedDict, CanonicalRepresenter.represent_dict)
CanonicalRepresenter.add_representer(tuple, CanonicalRepresenter.represent_list)
CanonicalRepresenter.add_representer(None, CanonicalRepresenter.represent_fallback)
CanonicalRepresenter.add_representer(date, CanonicalRepresenter.represent_date)
CanonicalRepresenter.add_representer(datetime, CanonicalRepresenter.represent_datetime)
CanonicalRepresenter.add_representer(set, CanonicalRepresenter.represent_set)
CanonicalRepresenter.add_representer(bytes, CanonicalRepresenter.represent_binary)
