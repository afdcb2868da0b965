"""Output format selection.

Two entry points with deliberately different strictness:

- :meth:`Format.parse` validates free text (CLI flags, config values) and
  raises :class:`InvalidFormat` for anything other than ``yaml``/``json``.
- :func:`is_json` picks the code path for an already-chosen value and never
  raises; anything that is not exactly ``json`` takes the YAML path.
"""

from __future__ import annotations

from enum import StrEnum
from typing import IO, TYPE_CHECKING, Any

if TYPE_CHECKING:
    from yamlformat.codec import Encoder
    from yamlformat.options import EncodeOption


class InvalidFormat(ValueError):
    """Raised when text does not name a supported format."""

    def __init__(self, value: str, valid: tuple[str, ...]) -> None:
        self.value = value
        self.valid = valid
        super().__init__(f"invalid format: {value} (valid: {', '.join(valid)})")


class Format(StrEnum):
    """Structured-data output format."""

    YAML = "yaml"
    JSON = "json"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)

    @classmethod
    def is_valid(cls, value: object) -> bool:
        """Return True iff *value* is exactly one of the canonical tags.

        Case-sensitive: ``"YAML"`` is not valid here even though
        :meth:`parse` accepts it.
        """
        return isinstance(value, str) and value in cls.values()

    @classmethod
    def parse(cls, text: str) -> Format:
        """Parse user-supplied text into a :class:`Format`.

        Raises:
            InvalidFormat: If the lower-cased text is not a known format.
        """
        normalized = text.lower()
        if not cls.is_valid(normalized):
            raise InvalidFormat(text, cls.values())
        return cls(normalized)

    def marshal(self, value: Any, *options: EncodeOption) -> bytes:
        """Encode *value* in this format with the default options."""
        from yamlformat.codec import encode

        return encode(value, self, *options)

    def new_encoder(self, stream: IO[Any], *options: EncodeOption) -> Encoder:
        """Return a streaming encoder for this format bound to *stream*."""
        from yamlformat.codec import new_encoder

        return new_encoder(stream, self, *options)


def parse_format(text: str) -> Format:
    """Module-level alias for :meth:`Format.parse`."""
    return Format.parse(text)


def is_json(value: object) -> bool:
    """Return True when *value* selects the JSON path.

    Total: unknown tags fall back to YAML instead of raising.
    """
    return value == Format.JSON
