"""yamlformat — canonical YAML and JSON output from one set of defaults.

Quick start:
    >>> from yamlformat import Format, encode
    >>> encode({"pi": 3.14, "whole": 100.0}, Format.YAML)
    b'pi: 3.14\\nwhole: 100\\n'
    >>> encode({"pi": 3.14, "whole": 100.0}, Format.JSON)
    b'{"pi": 3.14, "whole": 100}\\n'
"""

from __future__ import annotations

from yamlformat.codec import (
    Encoder,
    decode,
    encode,
    encode_json,
    encode_yaml,
    new_encoder,
    new_encoder_for_format,
    new_json_encoder,
    new_yaml_encoder,
)
from yamlformat.formats import Format, InvalidFormat, is_json, parse_format
from yamlformat.hooks import DataMarshaler, DataUnmarshaler
from yamlformat.numeric import canonical_float
from yamlformat.options import (
    DECODE_OPTIONS,
    ENCODE_OPTIONS,
    AllowDuplicateKeys,
    AutoInt,
    CustomFormatter,
    DecodeOption,
    EncodeOption,
    Indent,
    JSONShape,
    LiteralMultiline,
    SortKeys,
    UseConversionHook,
    default_decode_options,
    default_encode_options,
    with_decode_options,
    with_encode_options,
    with_json_encode_options,
)

__version__ = "0.1.0"

__all__ = [
    # Formats
    "Format",
    "InvalidFormat",
    "is_json",
    "parse_format",
    # Facade
    "Encoder",
    "decode",
    "encode",
    "encode_json",
    "encode_yaml",
    "new_encoder",
    "new_encoder_for_format",
    "new_json_encoder",
    "new_yaml_encoder",
    # Numbers
    "canonical_float",
    # Hooks
    "DataMarshaler",
    "DataUnmarshaler",
    # Options
    "DECODE_OPTIONS",
    "ENCODE_OPTIONS",
    "AllowDuplicateKeys",
    "AutoInt",
    "CustomFormatter",
    "DecodeOption",
    "EncodeOption",
    "Indent",
    "JSONShape",
    "LiteralMultiline",
    "SortKeys",
    "UseConversionHook",
    "default_decode_options",
    "default_encode_options",
    "with_decode_options",
    "with_encode_options",
    "with_json_encode_options",
]
