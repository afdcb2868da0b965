"""Encoder/decoder facade over ruamel.yaml.

Every entry point builds its effective option tuple as
``defaults + overrides``, resolves it into a policy and configures a fresh
``YAML`` instance from that policy.  Nothing here keeps state between calls
apart from an :class:`Encoder`'s document counter.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping, Sequence
from io import BytesIO
from typing import IO, Any

from ruamel.yaml import YAML

from yamlformat.emitter import CanonicalEmitter, JSONEmitter
from yamlformat.formats import Format, is_json
from yamlformat.hooks import build_target, is_type_target
from yamlformat.options import (
    DecodeOption,
    DecodePolicy,
    EncodeOption,
    EncodePolicy,
    resolve_decode_policy,
    resolve_encode_policy,
    with_decode_options,
    with_encode_options,
    with_json_encode_options,
)
from yamlformat.representer import CanonicalRepresenter

logger = logging.getLogger(__name__)

# Long scalars and flow collections are never folded onto several lines.
_UNBOUNDED_WIDTH = sys.maxsize

# ---------------------------------------------------------------------------
# Engine construction
# ---------------------------------------------------------------------------


def _new_dumper(policy: EncodePolicy) -> YAML:
    """Create a fresh dumper configured from *policy*.

    A new instance per call keeps a failed dump from leaving emitter state
    behind for the next one.
    """
    y = YAML(typ="safe", pure=True)
    y.Emitter = JSONEmitter if policy.json_shape else CanonicalEmitter
    y.Representer = CanonicalRepresenter.bind(policy)
    y.default_flow_style = policy.json_shape
    y.allow_unicode = True
    y.width = _UNBOUNDED_WIDTH
    if policy.indent is not None:
        y.indent(mapping=policy.indent, sequence=policy.indent, offset=policy.indent - 2)
    return y


def _new_loader(policy: DecodePolicy) -> YAML:
    y = YAML(typ="safe", pure=True)
    y.allow_duplicate_keys = policy.allow_duplicate_keys
    return y


def _encode_options(fmt: Any, overrides: tuple[EncodeOption, ...]) -> tuple[EncodeOption, ...]:
    if is_json(fmt):
        return with_json_encode_options(*overrides)
    return with_encode_options(*overrides)


# ---------------------------------------------------------------------------
# One-shot encode / decode
# ---------------------------------------------------------------------------


def encode(value: Any, fmt: Format | str = Format.YAML, *options: EncodeOption) -> bytes:
    """Encode *value* as *fmt* using the default options plus *options*.

    Unknown *fmt* values encode as YAML. Engine errors propagate unchanged.
    """
    effective = _encode_options(fmt, options)
    chosen = Format.JSON if is_json(fmt) else Format.YAML
    logger.debug(
        "Encoding %s document with %d options",
        chosen,
        len(effective),
        extra={"output_format": chosen, "option_count": len(effective)},
    )
    buf = BytesIO()
    _new_dumper(resolve_encode_policy(effective)).dump(value, buf)
    return buf.getvalue()


def encode_yaml(value: Any, *options: EncodeOption) -> bytes:
    """Encode *value* as block-style YAML."""
    return encode(value, Format.YAML, *options)


def encode_json(value: Any, *options: EncodeOption) -> bytes:
    """Encode *value* as single-line JSON."""
    return encode(value, Format.JSON, *options)


def decode(data: bytes | str, target: Any = None, *options: DecodeOption) -> Any:
    """Decode YAML or JSON *data*.

    *target* selects the result:

    - ``None``: the decoded plain data.
    - a ``dict`` or ``list`` instance: its contents are replaced in place
      and the same instance is returned.
    - a type or generic alias such as ``list[int]``: built via ``from_data``,
      ``model_validate`` or pydantic validation (see
      :func:`yamlformat.hooks.build_target`).

    Raises:
        TypeError: If the decoded document cannot populate *target*.
    """
    policy = resolve_decode_policy(with_decode_options(*options))
    logger.debug("Decoding %s document into %r", type(data).__name__, target)
    document = _new_loader(policy).load(data)
    return _into_target(document, target, policy)


def _into_target(document: Any, target: Any, policy: DecodePolicy) -> Any:
    if target is None:
        return document
    if isinstance(target, dict):
        if document is not None and not isinstance(document, Mapping):
            msg = f"Cannot decode {type(document).__name__} into a mapping"
            raise TypeError(msg)
        target.clear()
        target.update(document or {})
        return target
    if isinstance(target, list):
        if document is not None and (
            not isinstance(document, Sequence) or isinstance(document, str)
        ):
            msg = f"Cannot decode {type(document).__name__} into a sequence"
            raise TypeError(msg)
        target[:] = document or []
        return target
    if is_type_target(target):
        return build_target(target, document, use_hooks=policy.use_hooks)
    msg = f"Unsupported decode target: {target!r}"
    raise TypeError(msg)


# ---------------------------------------------------------------------------
# Streaming encoders
# ---------------------------------------------------------------------------


class Encoder:
    """Reusable encoder bound to one stream and one effective option tuple.

    The stream may be text or binary. Each :meth:`encode` call writes one
    document; YAML documents after the first are introduced with ``---``.
    """

    def __init__(self, stream: IO[Any], options: tuple[EncodeOption, ...]) -> None:
        self._stream = stream
        self._options = tuple(options)
        self._policy = resolve_encode_policy(self._options)
        self._documents = 0

    @property
    def options(self) -> tuple[EncodeOption, ...]:
        return self._options

    @property
    def documents(self) -> int:
        """Number of documents written so far."""
        return self._documents

    def encode(self, value: Any) -> None:
        dumper = _new_dumper(self._policy)
        if self._documents and not self._policy.json_shape:
            dumper.explicit_start = True
        dumper.dump(value, self._stream)
        self._documents += 1


def new_yaml_encoder(stream: IO[Any], *options: EncodeOption) -> Encoder:
    return Encoder(stream, with_encode_options(*options))


def new_json_encoder(stream: IO[Any], *options: EncodeOption) -> Encoder:
    return Encoder(stream, with_json_encode_options(*options))


def new_encoder(
    stream: IO[Any], fmt: Format | str = Format.YAML, *options: EncodeOption
) -> Encoder:
    """Return an encoder for *fmt*; unknown values get a YAML encoder."""
    if is_json(fmt):
        return new_json_encoder(stream, *options)
    return new_yaml_encoder(stream, *options)


def new_encoder_for_format(stream: IO[Any], fmt: Format | str) -> Encoder:
    """Encoder for *fmt* with the default options only."""
    return new_encoder(stream, fmt)
