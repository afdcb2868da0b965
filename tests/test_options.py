"""Tests for option bundles, composition and policy resolution."""

from __future__ import annotations

from decimal import Decimal

import pytest

from yamlformat.numeric import canonical_float
from yamlformat.options import (
    DECODE_OPTIONS,
    ENCODE_OPTIONS,
    AllowDuplicateKeys,
    AutoInt,
    CustomFormatter,
    DecodePolicy,
    EncodePolicy,
    Indent,
    JSONShape,
    LiteralMultiline,
    SortKeys,
    UseConversionHook,
    default_decode_options,
    default_encode_options,
    resolve_decode_policy,
    resolve_encode_policy,
    with_decode_options,
    with_encode_options,
    with_json_encode_options,
)


class TestDefaultBundles:
    def test_encode_defaults(self) -> None:
        policy = resolve_encode_policy(ENCODE_OPTIONS)
        assert policy.use_hooks is True
        assert policy.auto_int is True
        assert policy.literal_multiline is True
        assert policy.sort_keys is True
        assert policy.json_shape is False
        assert policy.indent is None
        assert policy.formatter_for(1.5) is canonical_float

    def test_decode_defaults(self) -> None:
        policy = resolve_decode_policy(DECODE_OPTIONS)
        assert policy == DecodePolicy(use_hooks=True, allow_duplicate_keys=False)

    def test_bundles_are_tuples(self) -> None:
        assert isinstance(ENCODE_OPTIONS, tuple)
        assert isinstance(DECODE_OPTIONS, tuple)

    def test_default_copies_are_equal(self) -> None:
        assert default_encode_options() == ENCODE_OPTIONS
        assert default_decode_options() == DECODE_OPTIONS


class TestComposition:
    def test_overrides_are_appended(self) -> None:
        opts = with_encode_options(Indent(4))
        assert opts[: len(ENCODE_OPTIONS)] == ENCODE_OPTIONS
        assert opts[-1] == Indent(4)

    def test_json_bundle_adds_shape_before_overrides(self) -> None:
        opts = with_json_encode_options(AutoInt(False))
        assert opts[: len(ENCODE_OPTIONS)] == ENCODE_OPTIONS
        assert opts[len(ENCODE_OPTIONS)] == JSONShape()
        assert opts[-1] == AutoInt(False)

    def test_decode_overrides_are_appended(self) -> None:
        opts = with_decode_options(AllowDuplicateKeys())
        assert opts == (*DECODE_OPTIONS, AllowDuplicateKeys())

    def test_defaults_never_change(self) -> None:
        before = ENCODE_OPTIONS
        with_encode_options(AutoInt(False), LiteralMultiline(False))
        with_json_encode_options(SortKeys(False))
        assert ENCODE_OPTIONS is before
        assert len(ENCODE_OPTIONS) == 5


class TestResolution:
    def test_later_option_wins(self) -> None:
        assert resolve_encode_policy([AutoInt(), AutoInt(False)]).auto_int is False
        assert resolve_encode_policy([AutoInt(False), AutoInt()]).auto_int is True

    def test_caller_override_shadows_default(self) -> None:
        policy = resolve_encode_policy(with_encode_options(LiteralMultiline(False)))
        assert policy.literal_multiline is False

    def test_empty_bundle_is_bare_engine(self) -> None:
        assert resolve_encode_policy(()) == EncodePolicy()

    def test_custom_formatter_replaces_default(self) -> None:
        def two_places(value: float) -> str:
            return f"{value:.2f}"

        policy = resolve_encode_policy(with_encode_options(CustomFormatter(float, two_places)))
        assert policy.formatter_for(3.14159) is two_places

    def test_formatters_accumulate_per_type(self) -> None:
        policy = resolve_encode_policy(with_encode_options(CustomFormatter(Decimal, str)))
        assert policy.formatter_for(Decimal("1.5")) is str
        assert policy.formatter_for(1.5) is canonical_float

    def test_formatter_lookup_follows_mro(self) -> None:
        class Meters(float):
            pass

        policy = resolve_encode_policy(ENCODE_OPTIONS)
        assert policy.formatter_for(Meters(2.0)) is canonical_float

    def test_bool_does_not_match_int_formatter(self) -> None:
        policy = resolve_encode_policy([CustomFormatter(int, str)])
        assert policy.formatter_for(3) is str
        assert policy.formatter_for(True) is None

    def test_hook_option_applies_to_both_directions(self) -> None:
        assert resolve_encode_policy([UseConversionHook(False)]).use_hooks is False
        assert resolve_decode_policy([UseConversionHook()]).use_hooks is True

    def test_decode_option_rejected_for_encode(self) -> None:
        with pytest.raises(TypeError, match="not an encode option"):
            resolve_encode_policy([AllowDuplicateKeys()])

    def test_encode_option_rejected_for_decode(self) -> None:
        with pytest.raises(TypeError, match="not a decode option"):
            resolve_decode_policy([AutoInt()])


class TestIndent:
    def test_valid_width(self) -> None:
        assert resolve_encode_policy([Indent(4)]).indent == 4

    @pytest.mark.parametrize("width", [0, 1, -2])
    def test_rejects_narrow_width(self, width: int) -> None:
        with pytest.raises(ValueError, match="at least 2"):
            Indent(width)
