"""
Output formats supported by Blender's glTF exporter

Each format maps to an `export_format` value of `bpy.ops.export_scene.gltf`
and knows how to build the one-line script Blender runs via --python-expr.
"""

from enum import Enum
from pathlib import Path
from typing import Union


class OutputFormat(str, Enum):
    """
    The output file format to export to.

    GLB:           glTF Binary (.glb), a single file with all data packed in binary form
    GLTF_EMBEDDED: glTF Embedded (.gltf), a single file with all data packed in JSON
    GLTF_SEPARATE: glTF Separate (.gltf + .bin + textures), JSON, binary and
                   texture data in separate files
    """
    GLB = "GLB"
    GLTF_EMBEDDED = "GLTF_EMBEDDED"
    GLTF_SEPARATE = "GLTF_SEPARATE"

    @property
    def extension(self) -> str:
        """File suffix Blender writes for this format"""
        if self is OutputFormat.GLB:
            return ".glb"
        return ".gltf"

    def output_path(self, path: Union[str, Path]) -> Path:
        """
        The path Blender's exporter will actually write for `path`.

        A .glb/.gltf suffix that doesn't match the format is swapped for the
        right one; any other suffix (or none) gets the extension appended.

        Example:
            >>> OutputFormat.GLB.output_path("out/ship")
            PosixPath('out/ship.glb')
            >>> OutputFormat.GLB.output_path("out/ship.gltf")
            PosixPath('out/ship.glb')
        """
        path = Path(path)
        suffix = path.suffix.lower()
        if suffix == self.extension:
            return path
        if suffix in ('.glb', '.gltf'):
            return path.with_suffix(self.extension)
        return path.with_name(path.name + self.extension)

    def export_script(self, output_path: Union[str, Path]) -> str:
        """
        Build the Python expression that makes Blender export the open scene.

        Args:
            output_path: Destination file path

        Returns:
            Script text suitable for `blender --python-expr`

        Example:
            >>> OutputFormat.GLB.export_script("/tmp/out.glb")
            "import bpy; bpy.ops.export_scene.gltf(filepath='/tmp/out.glb', check_existing=False, export_format='GLB')"
        """
        # repr() gives a valid Python string literal for any path, including Windows backslashes
        return (
            "import bpy; bpy.ops.export_scene.gltf("
            f"filepath={str(output_path)!r}, "
            "check_existing=False, "
            f"export_format={self.value!r})"
        )

    @classmethod
    def from_name(cls, name: Union[str, "OutputFormat"]) -> "OutputFormat":
        """Parse a user-supplied format name (case-insensitive)"""
        if isinstance(name, OutputFormat):
            return name

        fmt = name.strip().lower()
        if fmt == 'glb':
            return cls.GLB
        elif fmt in ('gltf', 'gltf_embedded', 'embedded'):
            return cls.GLTF_EMBEDDED
        elif fmt in ('gltf_separate', 'separate'):
            return cls.GLTF_SEPARATE

        raise ValueError(
            f"Unsupported format: {name}. "
            f"Supported: glb, gltf (embedded), gltf_separate"
        )
