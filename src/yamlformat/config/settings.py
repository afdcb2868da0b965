"""Default output settings — CLI flags, env vars, and code defaults.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``YAMLFORMAT_*`` prefix
  3. Code defaults
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from yamlformat.formats import Format
from yamlformat.options import EncodeOption, Indent


class FormatSettings(BaseSettings):
    """Frozen settings object shared by the CLI and library callers.

    Attributes:
        format: Output format; free text is validated through
            :meth:`Format.parse`, so ``"JSON"`` is accepted.
        indent: Block indentation width, or None for the engine default.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "YAMLFORMAT_",
    }

    format: Format = Format.YAML
    indent: int | None = Field(default=None, ge=2)
    verbose: bool = False
    log_json: bool = False

    @field_validator("format", mode="before")
    @classmethod
    def _parse_format(cls, value: Any) -> Format:
        if isinstance(value, Format):
            return value
        return Format.parse(str(value))

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Only init kwargs and env vars; no dotenv or secrets files."""
        return (init_settings, env_settings)

    @classmethod
    def from_cli(cls, **cli_flags: Any) -> FormatSettings:
        """Construct settings, dropping flags the user did not pass.

        ``None`` means "not given on the command line", so env vars and
        defaults still apply for those fields.
        """
        given = {key: value for key, value in cli_flags.items() if value is not None}
        return cls(**given)

    def encode_options(self) -> tuple[EncodeOption, ...]:
        """Overrides implied by these settings, to append after the defaults."""
        if self.indent is None:
            return ()
        return (Indent(self.indent),)
