"""
Blender executable discovery

To convert blends we need a Blender executable. By default we check the
BLENDER_PATH environment variable, `blender` on PATH, the Flatpak install and
then the usual install locations for the platform. A candidate only counts
if `<blender> -b -v` exits with status 0.
"""

from __future__ import annotations

import glob
import logging
import os
import subprocess
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Union

from blendconvert.exceptions import MissingBlenderExecutable

if TYPE_CHECKING:
    from blendconvert.options import ConversionOptions

logger = logging.getLogger(__name__)

FLATPAK_APP_ID = "org.blender.Blender"

# Flatpak can take a while to start the sandbox on first run
PROBE_TIMEOUT = 30


class ExecutableKind(str, Enum):
    NORMAL = "normal"    # `blender` found through PATH
    FLATPAK = "flatpak"  # `flatpak run org.blender.Blender`
    PATH = "path"        # explicit executable path


@dataclass(frozen=True)
class BlenderExecutable:
    """
    How to invoke Blender.

    Use BlenderExecutable.find() to run the search strategy, or
    BlenderExecutable.find_using_path() to check a single explicit path.
    """
    kind: ExecutableKind = ExecutableKind.NORMAL
    path: Optional[Path] = None

    @classmethod
    def normal(cls) -> "BlenderExecutable":
        return cls(ExecutableKind.NORMAL)

    @classmethod
    def flatpak(cls) -> "BlenderExecutable":
        return cls(ExecutableKind.FLATPAK)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "BlenderExecutable":
        return cls(ExecutableKind.PATH, Path(path))

    def command(self) -> List[str]:
        """Argument prefix that launches this Blender"""
        if self.kind is ExecutableKind.FLATPAK:
            return ["flatpak", "run", FLATPAK_APP_ID]
        if self.kind is ExecutableKind.PATH:
            return [str(self.path)]
        return ["blender"]

    def test(self) -> bool:
        """Return True if this executable starts and reports its version"""
        cmd = self.command() + ["-b", "-v"]
        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                timeout=PROBE_TIMEOUT,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("Blender probe %s failed: %s", cmd, e)
            return False

        logger.debug("Blender probe %s exited with %s", cmd, result.returncode)
        return result.returncode == 0

    @classmethod
    def candidates(cls) -> List["BlenderExecutable"]:
        """Search order used by find()"""
        found = []
        env_path = os.environ.get("BLENDER_PATH")
        if env_path:
            found.append(cls.from_path(env_path))
        found.append(cls.normal())
        found.append(cls.flatpak())
        found.extend(cls.from_path(p) for p in _common_locations())
        return found

    @classmethod
    def find(cls) -> "BlenderExecutable":
        """
        Return the first candidate that passes test().

        Raises:
            MissingBlenderExecutable: If no candidate works
        """
        for candidate in cls.candidates():
            if candidate.test():
                logger.info("Found Blender: %s", candidate)
                return candidate
        raise MissingBlenderExecutable()

    @classmethod
    def find_using_path(cls, path: Union[str, Path]) -> "BlenderExecutable":
        """
        Only try `path` as the Blender executable.

        Raises:
            MissingBlenderExecutable: If `path` does not pass test()
        """
        candidate = cls.from_path(path)
        if candidate.test():
            logger.info("Using Blender: %s", candidate)
            return candidate
        raise MissingBlenderExecutable(f"blender executable at {str(path)!r} is not usable")

    @classmethod
    def find_using_options(cls, options: "ConversionOptions") -> "BlenderExecutable":
        if options.blender_path is not None:
            return cls.find_using_path(options.blender_path)
        return cls.find()

    def __str__(self) -> str:
        return " ".join(self.command())


def _common_locations() -> List[str]:
    """Existing Blender executables in the usual install locations for this platform"""
    if sys.platform == "darwin":
        paths = ["/Applications/Blender.app/Contents/MacOS/Blender"]
    elif sys.platform == "win32":
        paths = []
        for base in (os.environ.get("ProgramFiles", r"C:\Program Files"),
                     os.environ.get("ProgramFiles(x86)", r"C:\Program Files (x86)")):
            pattern = os.path.join(base, "Blender Foundation", "Blender *", "blender.exe")
            paths.extend(sorted(glob.glob(pattern), reverse=True))  # newest first
        paths.append(r"C:\Program Files (x86)\Steam\steamapps\common\Blender\blender.exe")
    else:
        paths = ["/usr/bin/blender", "/usr/local/bin/blender", "/snap/bin/blender"]

    return [p for p in paths if os.path.isfile(p)]


def find_blender(path: Optional[Union[str, Path]] = None) -> BlenderExecutable:
    """Find Blender, checking only `path` when one is given"""
    if path is not None:
        return BlenderExecutable.find_using_path(path)
    return BlenderExecutable.find()
