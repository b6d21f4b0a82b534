"""Core numeric utilities.

Components:
    compare: Epsilon equality for scalars and vectors, NaN/Inf validity
    vectors: Texture coordinate wrapping, color rescaling, vector parsing
    rounding: Integer rounding for image partitioning

Host functions take Python floats and tuples; functions prefixed with
``ti_`` are Taichi functions to be called from inside kernels.
"""

from .compare import (
    EPSILON,
    equal,
    equal_vec3,
    is_valid,
    ti_equal,
    ti_equal_vec3,
    ti_is_valid,
)
from .rounding import round_down_to_multiple_of
from .vectors import (
    Vec2,
    Vec3,
    normalize_color,
    normalize_coords,
    ti_normalize_color,
    ti_normalize_coords,
    to_vec2,
    to_vec3,
)

__all__ = [
    # Compare
    "EPSILON",
    "equal",
    "equal_vec3",
    "is_valid",
    "ti_equal",
    "ti_equal_vec3",
    "ti_is_valid",
    # Vectors
    "Vec2",
    "Vec3",
    "normalize_coords",
    "normalize_color",
    "to_vec2",
    "to_vec3",
    "ti_normalize_coords",
    "ti_normalize_color",
    # Rounding
    "round_down_to_multiple_of",
]
