"""Command-line interface for the JSON value library."""

import logging
from typing import Optional, TextIO

import click

from . import __version__
from .codec import JSONCodec
from .config import JSONConfig
from .models.json_value import JSONValue
from .types import IndexOutOfRange, JSONError, KeyNotFound


def _configure_logging(level: int) -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def _load(ctx: click.Context, codec: JSONCodec, input_file: TextIO) -> JSONValue:
    """Parse the input or exit with the diagnostics."""
    result = codec.loads(input_file.read())
    if not result.ok:
        click.echo(f"❌ {input_file.name} is not valid JSON:", err=True)
        for error in result.errors:
            click.echo(f"   • {error}", err=True)
        ctx.exit(1)
    return result.value


def _emit(codec: JSONCodec, value: JSONValue, output: Optional[str], minified: bool) -> None:
    if output:
        try:
            info = codec.save_file(output, value, minified=minified)
        except JSONError as e:
            raise click.ClickException(str(e))
        click.echo(f"✅ Wrote {info['size']} bytes to {info['path']}")
    else:
        click.echo(codec.dumps(value, minified=minified))


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """JSON Value - parse, inspect and rewrite JSON documents."""
    try:
        config = JSONConfig.from_env()
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}")

    _configure_logging(logging.DEBUG if verbose else config.get_log_level())
    ctx.obj = config


@main.command('format')
@click.argument('input_file', type=click.File('r', encoding='utf-8'))
@click.option('--indent', '-i', type=click.IntRange(min=0), help='Spaces per indent level')
@click.option('--output', '-o', help='Output file path (default: stdout)')
@click.pass_context
def format_command(ctx: click.Context, input_file: TextIO, indent: Optional[int], output: Optional[str]):
    """Pretty-print a JSON document."""
    config = ctx.obj
    if indent is not None:
        config = JSONConfig.from_dict({**config.to_dict(), "indent": indent})

    codec = JSONCodec(config)
    value = _load(ctx, codec, input_file)
    _emit(codec, value, output, minified=False)


@main.command()
@click.argument('input_file', type=click.File('r', encoding='utf-8'))
@click.option('--output', '-o', help='Output file path (default: stdout)')
@click.pass_context
def minify(ctx: click.Context, input_file: TextIO, output: Optional[str]):
    """Strip all whitespace from a JSON document."""
    codec = JSONCodec(ctx.obj)
    value = _load(ctx, codec, input_file)
    _emit(codec, value, output, minified=True)


@main.command()
@click.argument('input_file', type=click.File('r', encoding='utf-8'))
@click.pass_context
def validate(ctx: click.Context, input_file: TextIO):
    """Check that a document parses."""
    codec = JSONCodec(ctx.obj)
    value = _load(ctx, codec, input_file)
    click.echo(f"✅ Valid JSON ({value.json_type().value})")


@main.command()
@click.argument('input_file', type=click.File('r', encoding='utf-8'))
@click.argument('path')
@click.pass_context
def get(ctx: click.Context, input_file: TextIO, path: str):
    """Print the value at a dotted PATH such as users.0.name."""
    codec = JSONCodec(ctx.obj)
    value = _load(ctx, codec, input_file)

    try:
        found = codec.lookup(value, path)
    except (KeyNotFound, IndexOutOfRange) as e:
        click.echo(f"❌ {path}: {e}", err=True)
        ctx.exit(1)

    click.echo(found.to_unescaped_string())


@main.command()
@click.argument('input_file', type=click.File('r', encoding='utf-8'))
@click.pass_context
def stats(ctx: click.Context, input_file: TextIO):
    """Show structure statistics and parse timings."""
    codec = JSONCodec(ctx.obj, enable_profiling=True)
    value = _load(ctx, codec, input_file)
    codec.dumps(value, minified=True)

    for name, figure in codec.get_structure_statistics(value).items():
        click.echo(f"{name}: {figure}")
    click.echo(codec.profiler.export_metrics("summary"))


if __name__ == '__main__':
    main()
