"""
blendconvert Build Step Example

Run as part of a build to convert every scene under assets/blends into OUT_DIR.
Set BLENDER_PATH to pin a Blender install, BLENDCONVERT_FORMAT to pick the format.

    OUT_DIR=build/assets python examples/build_assets.py
"""

import logging
import sys

from blendconvert import BlendConvertError, ConversionOptions

logging.basicConfig(level=logging.INFO)

try:
    written = ConversionOptions.from_env().convert_dir_build_script("assets/blends")
except BlendConvertError as e:
    print(f"❌ failed to convert blends: {e}", file=sys.stderr)
    sys.exit(1)

for path in written:
    print(f"✅ {path}")
