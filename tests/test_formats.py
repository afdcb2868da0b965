"""Tests for Format parsing, validity and dispatch."""

from __future__ import annotations

import io

import pytest

from yamlformat import Format, InvalidFormat, encode, is_json, new_encoder_for_format, parse_format


class TestParse:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("yaml", Format.YAML),
            ("json", Format.JSON),
            ("YAML", Format.YAML),
            ("JSON", Format.JSON),
            ("Json", Format.JSON),
        ],
    )
    def test_accepts_known_formats_case_insensitively(self, text: str, expected: Format) -> None:
        assert Format.parse(text) is expected
        assert parse_format(text) is expected

    @pytest.mark.parametrize("text", ["xml", "", "yml", " yaml", "toml", "invalid"])
    def test_rejects_everything_else(self, text: str) -> None:
        with pytest.raises(InvalidFormat) as exc_info:
            Format.parse(text)
        assert exc_info.value.value == text
        assert exc_info.value.valid == ("yaml", "json")

    def test_error_message_names_input_and_valid_set(self) -> None:
        with pytest.raises(InvalidFormat, match=r"^invalid format: XML \(valid: yaml, json\)$"):
            Format.parse("XML")

    def test_invalid_format_is_value_error(self) -> None:
        assert issubclass(InvalidFormat, ValueError)

    def test_parsed_value_is_lowercase_text(self) -> None:
        assert str(Format.parse("JSON")) == "json"


class TestIsValid:
    def test_members_are_valid(self) -> None:
        for member in Format:
            assert Format.is_valid(member)

    def test_raw_lowercase_text_is_valid(self) -> None:
        assert Format.is_valid("yaml")
        assert Format.is_valid("json")

    @pytest.mark.parametrize("value", ["YAML", "Json", "xml", "", None, 1])
    def test_other_values_are_invalid(self, value: object) -> None:
        assert not Format.is_valid(value)

    def test_parse_succeeds_where_is_valid_fails(self) -> None:
        # The predicate checks the raw value; normalization only happens in parse().
        assert not Format.is_valid("YAML")
        assert Format.parse("YAML") is Format.YAML


class TestDispatch:
    """Dispatch is total: anything but the exact ``json`` tag takes the YAML path.

    This is looser than ``Format.parse``, which rejects the same inputs.
    The tests pin that difference so a change to either side is noticed.
    """

    def test_is_json(self) -> None:
        assert is_json(Format.JSON)
        assert is_json("json")
        assert not is_json(Format.YAML)

    @pytest.mark.parametrize("value", ["invalid", "JSON", "", None])
    def test_unknown_values_fall_back_to_yaml(self, value: object) -> None:
        assert not is_json(value)
        assert encode({"key": "value"}, value) == b"key: value\n"  # type: ignore[arg-type]

    def test_encoder_for_invalid_format_writes_yaml(self) -> None:
        buf = io.StringIO()
        new_encoder_for_format(buf, "invalid").encode({"key": "value"})
        assert buf.getvalue() == "key: value\n"

    def test_invalid_value_is_still_rejected_by_parse(self) -> None:
        with pytest.raises(InvalidFormat):
            Format.parse("invalid")


class TestFormatMethods:
    def test_marshal(self) -> None:
        assert Format.YAML.marshal({"key": "value"}) == b"key: value\n"
        assert Format.JSON.marshal({"key": "value"}) == b'{"key": "value"}\n'

    def test_new_encoder(self) -> None:
        buf = io.StringIO()
        Format.JSON.new_encoder(buf).encode({"key": "value"})
        assert buf.getvalue().strip() == '{"key": "value"}'
