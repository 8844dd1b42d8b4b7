"""
Conversion options

ConversionOptions describe how blender files should be converted: which format
to export and, optionally, which Blender executable to use.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blendconvert.formats import OutputFormat

PathLike = Union[str, Path]


class ConversionOptions(BaseModel):
    """
    Options for converting .blend files.

    Attributes:
        output_format: Desired file format to convert to (default GLB)
        blender_path: Optional override path for the Blender executable. If None,
                      BlenderExecutable.find() is used to search for one.
        timeout: Seconds allowed for each Blender export, None to wait forever

    Examples:
        >>> ConversionOptions().convert("scene.blend", "scene.glb")
        >>> ConversionOptions(output_format="gltf").convert_dir("blends", "gltfs")
    """
    model_config = ConfigDict(extra='forbid')

    output_format: OutputFormat = Field(default=OutputFormat.GLB, description="Exporter format.")
    blender_path: Optional[Path] = Field(None, description="Explicit Blender executable.")
    timeout: Optional[float] = Field(None, gt=0, description="Per-file export timeout in seconds.")

    @field_validator('output_format', mode='before')
    @classmethod
    def parse_output_format(cls, v):
        if isinstance(v, str):
            return OutputFormat.from_name(v)
        return v

    @classmethod
    def new(cls) -> "ConversionOptions":
        """Options with GLB output and automatic Blender discovery"""
        return cls()

    @classmethod
    def from_env(cls) -> "ConversionOptions":
        """
        Build options from environment variables.

        BLENDCONVERT_FORMAT sets the output format and BLENDCONVERT_TIMEOUT the
        per-file timeout. BLENDER_PATH is not read here; discovery already tries
        it first, so a bad value still falls through to the other locations.
        """
        kwargs = {}
        fmt = os.environ.get("BLENDCONVERT_FORMAT")
        if fmt:
            kwargs["output_format"] = fmt
        timeout = os.environ.get("BLENDCONVERT_TIMEOUT")
        if timeout:
            kwargs["timeout"] = float(timeout)
        return cls(**kwargs)

    def convert(self, input_path: PathLike, output_path: PathLike) -> Path:
        """Convert an individual blend file"""
        from blendconvert.converter import convert
        return convert(input_path, output_path, self)

    def convert_dir(self, input_dir: PathLike, output_dir: PathLike) -> List[Path]:
        """Walk a directory and convert all blend files, preserving the directory structure"""
        from blendconvert.converter import convert_dir
        return convert_dir(input_dir, output_dir, self)

    def convert_dir_build_script(self, input_dir: PathLike) -> List[Path]:
        """Like convert_dir, but writes to the directory named by OUT_DIR"""
        from blendconvert.converter import convert_dir_build_script
        return convert_dir_build_script(input_dir, self)
