"""
blendconvert Quick Start Example

This example shows the basic usage of blendconvert to convert .blend files.
"""

from blendconvert import ConversionOptions, OutputFormat, convert

# Convert one file to GLB (Blender is located automatically)
print("Converting ship.blend...")
convert("blends/ship.blend", "output/ship.glb")
print("✅ Saved to output/ship.glb")

# Same scene as a single embedded .gltf
options = ConversionOptions(output_format=OutputFormat.GLTF_EMBEDDED)
options.convert("blends/ship.blend", "output/ship.gltf")
print("✅ Saved to output/ship.gltf")

# A whole directory: blends/**/*.blend -> output/blends/**/*.glb
written = ConversionOptions().convert_dir("blends", "output")
print(f"\nDone! Converted {len(written)} file(s) into output/")
