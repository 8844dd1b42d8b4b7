"""Custom exceptions for Blender conversion operations"""

from pathlib import Path
from typing import Optional


class BlendConvertError(Exception):
    """Base exception for blendconvert errors"""
    pass


class MissingBlenderExecutable(BlendConvertError):
    """No working Blender executable could be located"""

    def __init__(self, message: str = "could not locate blender executable, is blender in your path?"):
        super().__init__(message)


class InvalidInputFile(BlendConvertError, ValueError):
    """Input path is missing or is not a .blend file"""

    def __init__(self, path):
        self.path = Path(path)
        super().__init__(f"invalid input path {str(self.path)!r}")


class ExportError(BlendConvertError):
    """Blender failed to spawn, timed out, or exited non-zero"""

    def __init__(
        self,
        message: str,
        returncode: Optional[int] = None,
        stdout: str = "",
        stderr: str = ""
    ):
        super().__init__(message)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
