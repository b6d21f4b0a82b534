"""Vector normalization and construction helpers.

Texture coordinates are wrapped into [0, 1) so that textures tile, and
colors are rescaled so that their brightest channel does not exceed 1.0
while keeping the ratio between channels.

Example:
    >>> from src.rtcore.core.vectors import normalize_color, normalize_coords
    >>> normalize_color((2.0, 1.0, 0.5))
    (1.0, 0.5, 0.25)
    >>> normalize_coords((1.5, -0.5))
    (0.5, 0.5)
"""

import math
from collections.abc import Sequence

import taichi as ti
import taichi.math as tm

# Type aliases for host-side vectors
Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]

# Type aliases for kernel-side vectors
vec2 = tm.vec2
vec3 = tm.vec3


def normalize_coords(coord: Sequence[float]) -> Vec2:
    """Wrap a 2D texture coordinate into [0, 1).

    Uses floor-based wrapping, so negative inputs wrap around instead of
    producing negative fractions.

    Args:
        coord: The (u, v) texture coordinate.

    Returns:
        The fractional part of each component.
    """
    u, v = coord[0], coord[1]
    return (u - math.floor(u), v - math.floor(v))


def normalize_color(color: Sequence[float]) -> Vec3:
    """Rescale a color so that its maximum channel is at most 1.0.

    If the brightest channel exceeds 1.0, all channels are divided by it.
    Otherwise the color is returned unchanged; negative or sub-1 values are
    not clamped.

    Args:
        color: The (r, g, b) color.

    Returns:
        The rescaled color.
    """
    r, g, b = color[0], color[1], color[2]
    brightest = max(max(r, g), b)
    if brightest > 1.0:
        return (r / brightest, g / brightest, b / brightest)
    return (r, g, b)


def _parse_values(values: str | Sequence[float], count: int) -> list[float]:
    if isinstance(values, str):
        tokens = values.split()
    else:
        tokens = list(values)

    if len(tokens) != count:
        raise ValueError(f"Expected {count} values, got {len(tokens)}: {values!r}")

    try:
        return [float(token) for token in tokens]
    except (TypeError, ValueError) as e:
        raise ValueError(f"Cannot parse {values!r} as {count} numbers") from e


def to_vec2(values: str | Sequence[float]) -> Vec2:
    """Build a 2D vector from text or a sequence of numbers.

    Args:
        values: Either whitespace-separated text such as ``"0.5 1.0"`` (as
            found in scene and material files) or a sequence of 2 numbers.

    Returns:
        The parsed vector.

    Raises:
        ValueError: If there are not exactly 2 numeric values.
    """
    parsed = _parse_values(values, 2)
    return (parsed[0], parsed[1])


def to_vec3(values: str | Sequence[float]) -> Vec3:
    """Build a 3D vector from text or a sequence of numbers.

    Args:
        values: Either whitespace-separated text such as ``"0.8 0.2 0.1"`` or
            a sequence of 3 numbers.

    Returns:
        The parsed vector.

    Raises:
        ValueError: If there are not exactly 3 numeric values.
    """
    parsed = _parse_values(values, 3)
    return (parsed[0], parsed[1], parsed[2])


@ti.func
def ti_normalize_coords(coord: vec2) -> vec2:
    """Kernel-side equivalent of normalize_coords()."""
    return tm.fract(coord)


@ti.func
def ti_normalize_color(color: vec3) -> vec3:
    """Kernel-side equivalent of normalize_color()."""
    brightest = tm.max(tm.max(color.x, color.y), color.z)
    result = color
    if brightest > 1.0:
        result = color / brightest
    return result
