"""Encode/decode option kinds and the default option bundles.

An option bundle is an ordered tuple of option objects.  Resolving a
bundle folds each option into a frozen policy from left to right, so a
later option overrides an earlier one of the same kind.  Caller overrides
are always appended after the defaults::

    effective = ENCODE_OPTIONS + overrides

The default tuples are never mutated; every helper here returns a new one.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from yamlformat.numeric import canonical_float

Formatter = Callable[[Any], str]

# ---------------------------------------------------------------------------
# Resolved policies
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EncodePolicy:
    """Encode behaviors after every option has been applied.

    The field defaults are the bare engine behavior; the default bundle
    is what turns them on.
    """

    use_hooks: bool = False
    auto_int: bool = False
    literal_multiline: bool = False
    json_shape: bool = False
    sort_keys: bool = False
    indent: int | None = None
    formatters: Mapping[type, Formatter] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def formatter_for(self, value: Any) -> Formatter | None:
        """Return the registered formatter for *value*'s type (MRO order).

        ``bool`` only matches a formatter registered for ``bool`` itself.
        """
        if isinstance(value, bool) and bool not in self.formatters:
            return None
        for klass in type(value).__mro__:
            if klass in self.formatters:
                return self.formatters[klass]
        return None


@dataclass(frozen=True)
class DecodePolicy:
    """Decode behaviors after every option has been applied."""

    use_hooks: bool = False
    allow_duplicate_keys: bool = False


# ---------------------------------------------------------------------------
# Option kinds
# ---------------------------------------------------------------------------


class EncodeOption:
    """Base class for options accepted by encode entry points."""

    def apply(self, policy: EncodePolicy) -> EncodePolicy:
        raise NotImplementedError


class DecodeOption:
    """Base class for options accepted by decode entry points."""

    def apply(self, policy: DecodePolicy) -> DecodePolicy:
        raise NotImplementedError


@dataclass(frozen=True)
class UseConversionHook(EncodeOption, DecodeOption):
    """Prefer a type's own ``to_data``/``from_data`` over structural reflection."""

    enabled: bool = True

    def apply(self, policy: Any) -> Any:
        return replace(policy, use_hooks=self.enabled)


@dataclass(frozen=True)
class AutoInt(EncodeOption):
    """Emit finite floats with no fractional part as integer literals."""

    enabled: bool = True

    def apply(self, policy: EncodePolicy) -> EncodePolicy:
        return replace(policy, auto_int=self.enabled)


@dataclass(frozen=True)
class LiteralMultiline(EncodeOption):
    """Emit strings containing newlines in block literal style."""

    enabled: bool = True

    def apply(self, policy: EncodePolicy) -> EncodePolicy:
        return replace(policy, literal_multiline=self.enabled)


@dataclass(frozen=True)
class JSONShape(EncodeOption):
    """Single-line flow output with double-quoted strings (JSON-compatible)."""

    enabled: bool = True

    def apply(self, policy: EncodePolicy) -> EncodePolicy:
        return replace(policy, json_shape=self.enabled)


@dataclass(frozen=True)
class SortKeys(EncodeOption):
    """Emit mapping keys in lexicographic order of their text."""

    enabled: bool = True

    def apply(self, policy: EncodePolicy) -> EncodePolicy:
        return replace(policy, sort_keys=self.enabled)


@dataclass(frozen=True)
class Indent(EncodeOption):
    """Block indentation width."""

    width: int

    def __post_init__(self) -> None:
        if self.width < 2:
            msg = f"Indent width must be at least 2, got {self.width}"
            raise ValueError(msg)

    def apply(self, policy: EncodePolicy) -> EncodePolicy:
        return replace(policy, indent=self.width)


@dataclass(frozen=True)
class CustomFormatter(EncodeOption):
    """Render values of *type_* (and subclasses) as raw scalar text via *func*."""

    type_: type
    func: Formatter

    def apply(self, policy: EncodePolicy) -> EncodePolicy:
        formatters = dict(policy.formatters)
        formatters[self.type_] = self.func
        return replace(policy, formatters=MappingProxyType(formatters))


@dataclass(frozen=True)
class AllowDuplicateKeys(DecodeOption):
    """Accept mappings that repeat a key instead of raising."""

    enabled: bool = True

    def apply(self, policy: DecodePolicy) -> DecodePolicy:
        return replace(policy, allow_duplicate_keys=self.enabled)


# ---------------------------------------------------------------------------
# Default bundles
# ---------------------------------------------------------------------------

ENCODE_OPTIONS: tuple[EncodeOption, ...] = (
    UseConversionHook(),
    AutoInt(),
    LiteralMultiline(),
    CustomFormatter(float, canonical_float),
    SortKeys(),
)

DECODE_OPTIONS: tuple[DecodeOption, ...] = (UseConversionHook(),)


def default_encode_options() -> tuple[EncodeOption, ...]:
    """Return a copy of the default encode options."""
    return tuple(ENCODE_OPTIONS)


def default_decode_options() -> tuple[DecodeOption, ...]:
    """Return a copy of the default decode options."""
    return tuple(DECODE_OPTIONS)


def with_encode_options(*opts: EncodeOption) -> tuple[EncodeOption, ...]:
    """Defaults followed by *opts*."""
    return default_encode_options() + opts


def with_decode_options(*opts: DecodeOption) -> tuple[DecodeOption, ...]:
    """Defaults followed by *opts*."""
    return default_decode_options() + opts


def with_json_encode_options(*opts: EncodeOption) -> tuple[EncodeOption, ...]:
    """Defaults, then :class:`JSONShape`, then *opts*."""
    return default_encode_options() + (JSONShape(),) + opts


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def resolve_encode_policy(options: Iterable[Any]) -> EncodePolicy:
    """Fold *options* into an :class:`EncodePolicy`, later entries winning.

    Raises:
        TypeError: If an option is not an :class:`EncodeOption`.
    """
    policy = EncodePolicy()
    for opt in options:
        if not isinstance(opt, EncodeOption):
            msg = f"{opt!r} is not an encode option"
            raise TypeError(msg)
        policy = opt.apply(policy)
    return policy


def resolve_decode_policy(options: Iterable[Any]) -> DecodePolicy:
    """Fold *options* into a :class:`DecodePolicy`, later entries winning.

    Raises:
        TypeError: If an option is not a :class:`DecodeOption`.
    """
    policy = DecodePolicy()
    for opt in options:
        if not isinstance(opt, DecodeOption):
            msg = f"{opt!r} is not a decode option"
            raise TypeError(msg)
        policy = opt.apply(policy)
    return policy
