"""
blendconvert - Convert Blender .blend files to glTF/GLB from build pipelines

Finds a Blender executable (PATH, Flatpak or a common install location) and
runs it in background mode to export scenes with Blender's own glTF exporter.
"""

from blendconvert.blender import BlenderExecutable, ExecutableKind, find_blender
from blendconvert.converter import convert, convert_dir, convert_dir_build_script
from blendconvert.exceptions import (
    BlendConvertError,
    ExportError,
    InvalidInputFile,
    MissingBlenderExecutable,
)
from blendconvert.formats import OutputFormat
from blendconvert.options import ConversionOptions

__version__ = "0.1.0"
__all__ = [
    "BlenderExecutable",
    "ExecutableKind",
    "find_blender",
    "convert",
    "convert_dir",
    "convert_dir_build_script",
    "BlendConvertError",
    "ExportError",
    "InvalidInputFile",
    "MissingBlenderExecutable",
    "OutputFormat",
    "ConversionOptions",
]
