"""Root CLI group for yamlformat with global flags and the convert command."""

from __future__ import annotations

import logging
from typing import IO, Any

import click
from pydantic import ValidationError
from ruamel.yaml.error import YAMLError

from yamlformat import __version__
from yamlformat.codec import decode, encode
from yamlformat.config.logging import configure_logging
from yamlformat.config.settings import FormatSettings
from yamlformat.formats import Format, InvalidFormat

logger = logging.getLogger(__name__)


class FormatParamType(click.ParamType):
    """Click parameter that parses free text with :meth:`Format.parse`."""

    name = "format"

    def convert(
        self, value: Any, param: click.Parameter | None, ctx: click.Context | None
    ) -> Format:
        if isinstance(value, Format):
            return value
        try:
            return Format.parse(value)
        except InvalidFormat as exc:
            self.fail(str(exc), param, ctx)


FORMAT = FormatParamType()


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="yamlformat")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, log_json: bool) -> None:
    """yamlformat — canonical YAML/JSON rendering."""
    try:
        settings = FormatSettings.from_cli(
            verbose=verbose or None,
            log_json=log_json or None,
        )
    except ValidationError as exc:
        msg = f"Invalid YAMLFORMAT_* environment settings: {exc}"
        raise click.ClickException(msg) from exc
    configure_logging(verbose=settings.verbose, log_json=settings.log_json)
    ctx.obj = settings
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("source", type=click.File("rb"), default="-")
@click.option(
    "-t",
    "--to",
    "to_format",
    type=FORMAT,
    default=None,
    help="Output format: yaml or json (case-insensitive). Defaults to YAMLFORMAT_FORMAT or yaml.",
)
@click.option("--indent", type=click.IntRange(min=2), default=None, help="Block indent width.")
@click.option("-o", "--output", type=click.File("wb"), default="-", help="Output file.")
@click.pass_obj
def convert(
    settings: FormatSettings,
    source: IO[bytes],
    to_format: Format | None,
    indent: int | None,
    output: IO[bytes],
) -> None:
    """Re-render a YAML or JSON document (SOURCE, default stdin) canonically."""
    settings = FormatSettings.from_cli(
        format=to_format or settings.format,
        indent=indent if indent is not None else settings.indent,
        verbose=settings.verbose,
        log_json=settings.log_json,
    )
    name = getattr(source, "name", "<stdin>")
    raw = source.read()
    try:
        document = decode(raw)
        rendered = encode(document, settings.format, *settings.encode_options())
    except YAMLError as exc:
        msg = f"Cannot convert {name}: {exc}"
        raise click.ClickException(msg) from exc
    logger.debug("Converted %s to %s (%d bytes)", name, settings.format, len(rendered))
    output.write(rendered)


def main() -> None:
    cli()
