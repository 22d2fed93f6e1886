"""picture_kit.core: Foundation layer.

Contains the colour codec, change signals, the pixel buffer, the Pillow
storage surface, env loading, and the report builder.
This module has NO dependencies on picture_kit.operations or picture_kit.registry.
Only stdlib, numpy, and PIL are allowed here.
"""
