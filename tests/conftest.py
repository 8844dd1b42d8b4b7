"""
Shared fixtures: a fake Blender that writes whatever file the export script asks for
"""
import ast
import sys
import pytest
from pathlib import Path
from unittest.mock import Mock, patch

from blendconvert import BlenderExecutable


FAKE_BLENDER = "/opt/blender/blender"


def export_target(cmd):
    """Extract the filepath= argument from the --python-expr script in a Blender command"""
    script = cmd[cmd.index("--python-expr") + 1]
    call = ast.parse(script).body[-1].value
    for keyword in call.keywords:
        if keyword.arg == "filepath":
            return ast.literal_eval(keyword.value)
    raise AssertionError(f"no filepath in export script: {script}")


@pytest.fixture
def fake_blender():
    """
    Patch discovery and subprocess.run so conversions succeed without Blender.

    Yields the subprocess.run mock; set `.side_effect` to change behaviour.
    """
    def run(cmd, **kwargs):
        Path(export_target(cmd)).write_bytes(b"glTF")
        return Mock(returncode=0, stdout="Blender 4.2.0\n", stderr="")

    executable = BlenderExecutable.from_path(FAKE_BLENDER)
    with patch.object(BlenderExecutable, "find_using_options", return_value=executable) as find, \
            patch("blendconvert.converter.subprocess.run", side_effect=run) as mock_run:
        mock_run.find = find
        yield mock_run


@pytest.fixture
def blend_file(tmp_path):
    path = tmp_path / "scene.blend"
    path.write_bytes(b"BLENDER-v420")
    return path


@pytest.fixture
def blend_tree(tmp_path):
    """
    blends/
        a.blend
        a.blend1     (Blender backup, skipped)
        notes.txt    (skipped)
        sub/b.blend
    """
    root = tmp_path / "blends"
    (root / "sub").mkdir(parents=True)
    (root / "a.blend").write_bytes(b"BLENDER")
    (root / "a.blend1").write_bytes(b"BLENDER")
    (root / "notes.txt").write_text("not a scene")
    (root / "sub" / "b.blend").write_bytes(b"BLENDER")
    return root


FAKE_BLENDER_SCRIPT = '''\
import ast
import os
import sys

# Log lines carry a Latin-1 file name, which is not valid UTF-8
out = sys.stdout.buffer
if "--python-expr" not in sys.argv:
    out.write(b"Blender 4.2.0 caf\\xe9\\n")
    sys.exit(0)

script = sys.argv[sys.argv.index("--python-expr") + 1]
call = ast.parse(script).body[-1].value
kwargs = {k.arg: ast.literal_eval(k.value) for k in call.keywords}
filepath = kwargs["filepath"]

# Blender's glTF exporter forces the extension to match the export format
desired = ".glb" if kwargs["export_format"] == "GLB" else ".gltf"
stem, ext = os.path.splitext(filepath)
if ext.lower() not in (".glb", ".gltf"):
    filepath += desired
elif ext.lower() != desired:
    filepath = stem + desired

with open(filepath, "wb") as f:
    f.write(b"glTF")
out.write(b"Read blend: /data/caf\\xe9.blend\\n")
'''


@pytest.fixture
def script_blender(tmp_path):
    """
    Path to an executable stand-in for Blender, run as a real subprocess.
    """
    if sys.platform == "win32":
        pytest.skip("shebang scripts are not executable on Windows")
    path = tmp_path / "bin" / "blender"
    path.parent.mkdir()
    path.write_text(f"#!{sys.executable}\n" + FAKE_BLENDER_SCRIPT)
    path.chmod(0o755)
    return path
