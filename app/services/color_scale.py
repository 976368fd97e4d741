"""
Color Scale Mapper

Maps aggregated density values onto a discrete color scale.
"""

import math
from typing import List, Sequence

from app.schemas.density import ColoredGridCell, GridCell

# Floor for the maximum used when coloring a whole grid
MIN_SCALE_MAX = 1.0


def get_color_for_density(value: float, max_value: float, color_scale: Sequence[str]) -> str:
    """
    Pick the color for *value* relative to *max_value*.

    The value is mapped linearly onto the scale indices with
    ``floor(value / max_value * (len - 1))`` and clamped to the scale.
    A ``max_value`` of zero always yields the first color.

    Raises:
        ValueError: If the color scale is empty
    """
    if not color_scale:
        raise ValueError("color_scale must contain at least one color")
    if max_value == 0:
        return color_scale[0]

    last = len(color_scale) - 1
    position = (value / max_value) * last
    if math.isnan(position):
        return color_scale[0]
    if math.isinf(position):
        return color_scale[last] if position > 0 else color_scale[0]
    index = int(math.floor(position))
    return color_scale[min(max(index, 0), last)]


def colorize_grid(cells: Sequence[GridCell], color_scale: Sequence[str]) -> List[ColoredGridCell]:
    """
    Attach a color to every cell.

    Colors are relative to the largest cell value, never less than 1.
    """
    max_value = max([cell.value for cell in cells] + [MIN_SCALE_MAX])
    return [
        ColoredGridCell(
            **cell.model_dump(),
            color=get_color_for_density(cell.value, max_value, color_scale),
        )
        for cell in cells
    ]


def generate_density_color_scale(steps: int = 5) -> List[str]:
    """Build an ``rgb(r, g, b)`` scale running from light blue-white to red."""
    if steps < 2:
        raise ValueError("steps must be at least 2")
    colors: List[str] = []
    for i in range(steps):
        intensity = i / (steps - 1)
        red = round(255 * intensity)
        green = round(255 * (1 - intensity * 0.8))
        blue = round(255 * (1 - intensity))
        colors.append(f"rgb({red}, {green}, {blue})")
    return colors
