"""Report builder: text and JSON summaries of a pixel buffer."""

import json
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from picture_kit.core.buffer import PixelBuffer
from picture_kit.core.codec import StructColour, to_hex, unpack_colours


@dataclass
class Report:
    """Summary of a buffer after a picture-tool run."""

    image_path: str = ''
    width: int = 0
    height: int = 0
    pixel_count: int = 0
    unique_colours: int = 0
    mean_colour: str | None = None  # #rrggbb, None for an empty buffer
    operations: list[str] = field(default_factory=list)
    size_version: int = 0
    pixels_version: int = 0


def build_report(buffer: PixelBuffer, image_path: str = '', operations: list[str] | None = None) -> Report:
    """Summarise an initialised buffer."""
    pixels = buffer.get_pixels()
    report = Report(
        image_path=image_path,
        width=buffer.width,
        height=buffer.height,
        pixel_count=int(pixels.size),
        operations=list(operations or []),
        size_version=buffer.size_changed.version,
        pixels_version=buffer.pixels_changed.version,
    )
    if pixels.size:
        # alpha is not part of a colour's identity once unpacked
        report.unique_colours = int(np.unique(pixels & 0x00FFFFFF).size)
        r, g, b, _a = unpack_colours(pixels).mean(axis=0)
        report.mean_colour = to_hex(StructColour(float(r), float(g), float(b)))
    return report


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = [f'picture-tool: {report.image_path} ({report.width}×{report.height})']
    if report.operations:
        lines.append(f'  applied: {" → ".join(report.operations)}')
    lines.append(f'  pixels: {report.pixel_count}')
    lines.append(f'  unique colours: {report.unique_colours}')
    if report.mean_colour:
        lines.append(f'  mean colour: {report.mean_colour}')
    lines.append(f'  changes: size v{report.size_version}  pixels v{report.pixels_version}')
    return '\n'.join(lines)


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'image': report.image_path,
        'dimensions': {'width': report.width, 'height': report.height},
        'pixels': report.pixel_count,
        'unique_colours': report.unique_colours,
        'mean_colour': report.mean_colour,
        'operations': report.operations,
        'versions': {'size': report.size_version, 'pixels': report.pixels_version},
    }
    return json.dumps(obj, indent=2)
