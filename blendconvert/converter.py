"""
Blend file conversion

Runs Blender in background mode on a .blend file and has it export the scene
with its glTF exporter. Success is defined by Blender's exit status and the
output file existing afterwards.

Usage:
    Convert a single file:
    >>> convert("blends/ship.blend", "out/ship.glb")

    Convert a directory tree, preserving structure:
    >>> convert_dir("blends", "gltfs")   # blends/a/ship.blend -> gltfs/blends/a/ship.glb
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from blendconvert.blender import BlenderExecutable
from blendconvert.exceptions import BlendConvertError, ExportError, InvalidInputFile
from blendconvert.options import ConversionOptions

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

BLEND_SUFFIX = ".blend"


def convert(
    input_path: PathLike,
    output_path: PathLike,
    options: Optional[ConversionOptions] = None
) -> Path:
    """
    Convert an individual blend file.

    Args:
        input_path: Path to a .blend file
        output_path: Path of the file to write
        options: Conversion options (defaults to GLB with automatic discovery)

    Returns:
        Absolute path of the written file

    Raises:
        MissingBlenderExecutable: If Blender can't be found
        InvalidInputFile: If input is missing or not a .blend file
        ExportError: If Blender fails
    """
    options = options or ConversionOptions()
    input_path = _check_input(Path(input_path))
    blender = BlenderExecutable.find_using_options(options)
    return _convert_file(input_path, Path(output_path), blender, options)


def convert_dir(
    input_dir: PathLike,
    output_dir: PathLike,
    options: Optional[ConversionOptions] = None
) -> List[Path]:
    """
    Walk a directory and convert every .blend file in it.

    The directory structure is preserved under output_dir, including the
    input directory's own name: `<input_dir>/sub/ship.blend` is written to
    `<output_dir>/<input_dir name>/sub/ship<ext>`. Other files are skipped.
    Conversion stops at the first failure.

    Returns:
        Paths of the written files, in walk order
    """
    options = options or ConversionOptions()
    input_dir = Path(input_dir)
    if not input_dir.is_dir():
        raise InvalidInputFile(input_dir)

    # Locate Blender once for the whole tree
    blender = BlenderExecutable.find_using_options(options)

    target_root = Path(output_dir) / input_dir.resolve().name
    written = []
    for entry in sorted(input_dir.rglob("*")):
        if not entry.is_file():
            continue
        if entry.suffix != BLEND_SUFFIX:
            logger.debug("Skipping non-blend file: %s", entry)
            continue

        relative = entry.relative_to(input_dir)
        output_path = target_root / relative.parent / (entry.stem + options.output_format.extension)
        written.append(_convert_file(entry.resolve(), output_path, blender, options))

    logger.info("Converted %d blend file(s) from %s", len(written), input_dir)
    return written


def convert_dir_build_script(
    input_dir: PathLike,
    options: Optional[ConversionOptions] = None
) -> List[Path]:
    """
    Convert a directory tree into the build output directory named by OUT_DIR.

    For use from build scripts only.
    """
    out_dir = os.environ.get("OUT_DIR")
    if not out_dir:
        raise BlendConvertError("OUT_DIR is not set, this must be called from a build script")
    return convert_dir(input_dir, out_dir, options)


def _check_input(input_path: Path) -> Path:
    """Resolve input_path, raising InvalidInputFile unless it is an existing .blend file"""
    if not input_path.is_file():
        raise InvalidInputFile(input_path)
    input_path = input_path.resolve()
    if input_path.suffix != BLEND_SUFFIX:
        raise InvalidInputFile(input_path)
    return input_path


def _convert_file(
    input_path: Path,
    output_path: Path,
    blender: BlenderExecutable,
    options: ConversionOptions
) -> Path:
    """Run Blender on an already-validated, absolute input path"""
    output_path = options.output_format.output_path(output_path.absolute())
    output_path.parent.mkdir(parents=True, exist_ok=True)

    cmd = blender.command() + [
        "-b", str(input_path),
        "--python-expr", options.output_format.export_script(output_path),
    ]

    logger.info("Converting %s -> %s (%s)", input_path, output_path, options.output_format.value)
    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
            timeout=options.timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        raise ExportError(f"export of {input_path} timed out after {options.timeout}s") from e
    except OSError as e:
        raise ExportError(f"failed to run blender: {e}") from e

    if result.returncode != 0:
        logger.error(
            "Blender export failed: rc=%s\nSTDOUT:\n%s\nSTDERR:\n%s",
            result.returncode, result.stdout, result.stderr
        )
        raise ExportError(
            f"export failed with exit code {result.returncode}",
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )

    if not output_path.exists():
        logger.error(
            "Blender produced no output file %s. STDOUT:\n%s\nSTDERR:\n%s",
            output_path, result.stdout, result.stderr
        )
        raise ExportError(
            f"export produced no output file: {output_path}",
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )

    return output_path
