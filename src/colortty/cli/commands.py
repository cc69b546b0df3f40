"""colortty commands: convert, list and get.

Examples::

    # List color schemes at https://github.com/mbadolato/iTerm2-Color-Schemes
    colortty list
    colortty list -p iterm

    # List color schemes at https://github.com/Gogh-Co/Gogh
    colortty list -p gogh

    # Get a color scheme
    colortty get <color scheme name>
    colortty get -p gogh <color scheme name>

    # Convert with implicit or explicit input type
    colortty convert some-color.itermcolors
    colortty convert -i mintty some-color-theme

    # Convert stdin (explicit input type is necessary)
    cat some-color-theme | colortty convert -i gogh -
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from ..catalog import CatalogClient
from ..config import ConfigModel, load_config
from ..errors import (
    ColorttyError,
    MissingInputFormat,
    MissingName,
    MissingSource,
    ReadSourceError,
)
from ..logging_config import configure_logging
from ..parsers import ColorSchemeFormat
from ..provider import Provider
from ..scheme import OutputFormat

FORMAT_NAMES = [scheme_format.value for scheme_format in ColorSchemeFormat]
OUTPUT_NAMES = [output_format.value for output_format in OutputFormat]

err_console = Console(stderr=True)


def fail(error: Exception) -> None:
    """Report an error on stderr and exit with a non-zero status."""
    err_console.print(f"[red]error:[/red] {escape(str(error))}", soft_wrap=True)
    sys.exit(1)


def get_settings(ctx: click.Context) -> ConfigModel:
    return ctx.obj["config"]


def open_client(ctx: click.Context) -> CatalogClient:
    config = get_settings(ctx)
    return CatalogClient(
        user_agent=config.user_agent,
        timeout=config.request_timeout,
        transport=ctx.obj.get("transport"),
    )


def make_provider(config: ConfigModel, name: Optional[str], client: CatalogClient) -> Provider:
    return Provider.from_name(
        name or config.default_provider,
        cache_root=config.cache_path,
        client=client,
        branch=config.branch,
        max_concurrency=config.max_concurrent_downloads,
    )


@click.group()
@click.option("--config", "config_path", type=click.Path(dir_okay=False),
              help="Path to config file")
@click.option("--cache-dir", type=click.Path(file_okay=False),
              help="Directory for downloaded color schemes")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.version_option(package_name="colortty")
@click.pass_context
def main(ctx, config_path, cache_dir, verbose):
    """colortty - color scheme converter for alacritty."""
    ctx.ensure_object(dict)
    configure_logging(verbose)

    try:
        config = load_config(Path(config_path) if config_path else None)
    except ColorttyError as e:
        fail(e)
    if cache_dir:
        config.cache_dir = str(Path(cache_dir).expanduser())
    ctx.obj["config"] = config


@main.command()
@click.argument("source", required=False)
@click.option("--input-format", "-i", type=click.Choice(FORMAT_NAMES),
              help="Input format (guessed from the file extension if omitted)")
@click.option("--output-format", "-o", type=click.Choice(OUTPUT_NAMES),
              help="Output format")
@click.pass_context
def convert(ctx, source, input_format, output_format):
    """Convert a color scheme file, or '-' for stdin."""
    config = get_settings(ctx)
    try:
        if not source:
            raise MissingSource()

        scheme_format = None
        if input_format:
            scheme_format = ColorSchemeFormat.from_string(input_format)
        elif source != "-":
            scheme_format = ColorSchemeFormat.from_filename(source)
        if scheme_format is None:
            raise MissingInputFormat()

        content = read_source(source)
        scheme = scheme_format.parse(content)
        click.echo(scheme.render(OutputFormat(output_format or config.output_format)), nl=False)
    except ColorttyError as e:
        fail(e)


@main.command(name="list")
@click.option("--provider", "-p", help="Color scheme provider: 'iterm'|'gogh'")
@click.option("--update", "-u", is_flag=True, help="Re-download the cached color schemes")
@click.pass_context
def list_schemes(ctx, provider, update):
    """List color schemes with a preview."""
    try:
        schemes = asyncio.run(_list_schemes(ctx, provider, update))
    except ColorttyError as e:
        fail(e)

    for name, scheme in schemes:
        # Previews are ANSI escapes; keep them when stdout is piped.
        click.echo(f"{scheme.to_preview()} {name}", color=True)


async def _list_schemes(ctx, provider_name, update):
    async with open_client(ctx) as client:
        provider = make_provider(get_settings(ctx), provider_name, client)
        if update:
            return await provider.update()
        return await provider.list()


@main.command()
@click.argument("name", required=False)
@click.option("--provider", "-p", help="Color scheme provider: 'iterm'|'gogh'")
@click.option("--output-format", "-o", type=click.Choice(OUTPUT_NAMES),
              help="Output format")
@click.pass_context
def get(ctx, name, provider, output_format):
    """Get a color scheme from a provider."""
    config = get_settings(ctx)
    try:
        if not name:
            raise MissingName()
        scheme = asyncio.run(_get_scheme(ctx, provider, name))
    except ColorttyError as e:
        fail(e)

    click.echo(scheme.render(OutputFormat(output_format or config.output_format)), nl=False)


async def _get_scheme(ctx, provider_name, name):
    async with open_client(ctx) as client:
        provider = make_provider(get_settings(ctx), provider_name, client)
        return await provider.get(name)


def read_source(source: str) -> str:
    """Read the conversion source; ``-`` is stdin."""
    if source == "-":
        try:
            with click.open_file("-") as stream:
                return stream.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ReadSourceError(f"failed to read from stdin: {e}") from e
    try:
        return Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadSourceError(f"failed to read source {source}: {e}") from e
