"""Command-line interface for the i18n transformer."""

import asyncio
import logging
import sys
from pathlib import Path

import click

from . import __version__
from .config import TransformOptions
from .transformer import I18nTransformer


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)


def _conversion_options(command):
    """Options shared by both conversion directions."""
    command = click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')(command)
    command = click.option('--stringify-unsupported', is_flag=True,
                           help='Write non-JSON leaf values as strings instead of failing')(command)
    command = click.option('--skip-malformed', is_flag=True,
                           help='Skip keys with empty segments (e.g. "a..b") instead of failing')(command)
    command = click.option('--strict-root', is_flag=True,
                           help='Fail when top-level keys mix indices and names')(command)
    command = click.option('--root', '-r', default='.', show_default=True,
                           type=click.Path(file_okay=False, path_type=Path),
                           help='Project root holding the _xlsx and _json folders')(command)
    return command


def _build_options(strict_root: bool, skip_malformed: bool, stringify_unsupported: bool) -> TransformOptions:
    return TransformOptions(
        malformed_paths="skip" if skip_malformed else "raise",
        unsupported_values="stringify" if stringify_unsupported else "reject",
        strict_root=strict_root,
    )


def _report(tag: str, result) -> None:
    for unit in result.units:
        if unit.success:
            click.echo(f"[{tag}] {unit.name}: {unit.key_count} keys")
    for error in result.errors or []:
        click.echo(f"[{tag}] {error}", err=True)

    if not result.success:
        sys.exit(1)
    click.echo(f"[{tag}] Done: {len(result.written)} unit(s) -> {result.output_path}")


@click.group()
@click.version_option(version=__version__)
def main():
    """Convert i18n spreadsheets to nested JSON documents and back."""
    pass


@main.command()
@click.argument('folder_name')
@click.option('--multi', is_flag=True,
              help='Read every workbook in _xlsx/<FOLDER_NAME>/, one language per workbook')
@_conversion_options
def xlsx2json(folder_name: str, multi: bool, root: Path, strict_root: bool,
              skip_malformed: bool, stringify_unsupported: bool, verbose: bool):
    """Convert _xlsx/<FOLDER_NAME>.xlsx into _json/<FOLDER_NAME>/<column>.json files."""
    _configure_logging(verbose)
    output_dir = root / '_json' / folder_name

    transformer = I18nTransformer(_build_options(strict_root, skip_malformed, stringify_unsupported))
    try:
        if multi:
            input_dir = root / '_xlsx' / folder_name
            if not input_dir.is_dir():
                click.echo(f"[xlsx2json] Input directory not found: {input_dir}", err=True)
                sys.exit(1)
            result = asyncio.run(transformer.sheets_to_json(str(input_dir), str(output_dir)))
        else:
            input_path = root / '_xlsx' / f"{folder_name}.xlsx"
            if not input_path.is_file():
                click.echo(f"[xlsx2json] Input file not found: {input_path}", err=True)
                sys.exit(1)
            result = asyncio.run(transformer.sheet_to_json(str(input_path), str(output_dir)))
    finally:
        transformer.close()

    _report("xlsx2json", result)


@main.command()
@click.argument('folder_name')
@_conversion_options
def json2xlsx(folder_name: str, root: Path, strict_root: bool,
              skip_malformed: bool, stringify_unsupported: bool, verbose: bool):
    """Merge _json/<FOLDER_NAME>/*.json into _xlsx/<FOLDER_NAME>.xlsx."""
    _configure_logging(verbose)
    input_dir = root / '_json' / folder_name
    output_path = root / '_xlsx' / f"{folder_name}.xlsx"

    if not input_dir.is_dir():
        click.echo(f"[json2xlsx] Input directory not found: {input_dir}", err=True)
        sys.exit(1)

    transformer = I18nTransformer(_build_options(strict_root, skip_malformed, stringify_unsupported))
    try:
        result = asyncio.run(transformer.json_to_sheet(str(input_dir), str(output_path)))
    finally:
        transformer.close()

    _report("json2xlsx", result)


if __name__ == '__main__':
    main()
