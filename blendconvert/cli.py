"""
blendconvert CLI - Command-line interface for converting .blend files
"""

import click
import logging
import sys
from blendconvert.blender import find_blender
from blendconvert.converter import convert as convert_file, convert_dir as convert_tree
from blendconvert.exceptions import ExportError, InvalidInputFile, MissingBlenderExecutable
from blendconvert.options import ConversionOptions


def _setup_logging(verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def _build_options(fmt, blender, timeout):
    return ConversionOptions(output_format=fmt, blender_path=blender, timeout=timeout)


def _fail(label, error):
    click.secho(f"{label}: {error}", fg='red', err=True)
    sys.exit(1)


format_option = click.option(
    '-f', '--format', 'fmt', default='glb', show_default=True,
    help='Output format: glb, gltf (embedded) or gltf_separate'
)
blender_option = click.option(
    '--blender', default=None, type=click.Path(dir_okay=False),
    help='Blender executable to use (skips automatic discovery)'
)
timeout_option = click.option(
    '--timeout', default=None, type=click.FloatRange(min=0, min_open=True),
    help='Seconds allowed per file before the export is aborted'
)
verbose_option = click.option('--verbose', '-v', is_flag=True, help='Show debug logging')


@click.group()
@click.version_option()
def cli():
    """
    blendconvert - Convert Blender .blend files to glTF/GLB using Blender.

    Examples:
        blendconvert convert ship.blend ship.glb
        blendconvert convert-dir blends gltfs --format gltf
        blendconvert find
    """
    pass


@cli.command()
@click.argument('input_path')
@click.argument('output_path')
@format_option
@blender_option
@timeout_option
@verbose_option
def convert(input_path, output_path, fmt, blender, timeout, verbose):
    """
    Convert a single .blend file.

    Examples:
        blendconvert convert ship.blend ship.glb
        blendconvert convert ship.blend ship.gltf -f gltf --blender /opt/blender/blender
    """
    _setup_logging(verbose)
    try:
        options = _build_options(fmt, blender, timeout)

        if verbose:
            click.echo(f"Converting: {input_path} → {output_path}")

        written = convert_file(input_path, output_path, options)

        click.secho(f"✓ Success! Converted to {written}", fg='green')

    except MissingBlenderExecutable as e:
        _fail("Blender not found", e)
    except InvalidInputFile as e:
        _fail("Error", e)
    except ExportError as e:
        if e.stderr:
            click.echo(e.stderr, err=True)
        _fail("Export failed", e)
    except ValueError as e:
        _fail("Error", e)


@cli.command('convert-dir')
@click.argument('input_dir')
@click.argument('output_dir')
@format_option
@blender_option
@timeout_option
@verbose_option
def convert_dir(input_dir, output_dir, fmt, blender, timeout, verbose):
    """
    Convert every .blend file under a directory, preserving its structure.

    Examples:
        blendconvert convert-dir blends build/assets
    """
    _setup_logging(verbose)
    try:
        options = _build_options(fmt, blender, timeout)
        written = convert_tree(input_dir, output_dir, options)

        if verbose:
            for path in written:
                click.echo(f"  {path}")

        click.secho(f"✓ Success! Converted {len(written)} file(s) into {output_dir}", fg='green')

    except MissingBlenderExecutable as e:
        _fail("Blender not found", e)
    except InvalidInputFile as e:
        _fail("Error", e)
    except ExportError as e:
        if e.stderr:
            click.echo(e.stderr, err=True)
        _fail("Export failed", e)
    except ValueError as e:
        _fail("Error", e)


@cli.command()
@blender_option
@verbose_option
def find(blender, verbose):
    """
    Locate Blender and print the command used to launch it.
    """
    _setup_logging(verbose)
    try:
        executable = find_blender(blender)
        click.echo(str(executable))
    except MissingBlenderExecutable as e:
        _fail("Blender not found", e)


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
