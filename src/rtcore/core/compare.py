"""Epsilon comparisons and floating-point validity checks.

Every equality decision in the renderer goes through the single EPSILON
defined here, so that clustering and deduplication elsewhere stay consistent.

Host functions work on Python floats and tuples. The ``ti_`` variants are
Taichi functions for use inside kernels.

Example:
    >>> from src.rtcore.core.compare import equal, is_valid
    >>> equal(0.1 + 0.2, 0.3)
    True
    >>> is_valid(float("nan"))
    False
"""

import math
from collections.abc import Sequence

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors
vec3 = tm.vec3

# Process-wide tolerance for all equality comparisons
EPSILON = 1e-6


def equal(a: float, b: float) -> bool:
    """Check whether two floating point values are equal within EPSILON.

    Args:
        a: A floating point value.
        b: A floating point value.

    Returns:
        True if |a - b| < EPSILON.
    """
    return abs(a - b) < EPSILON


def equal_vec3(v1: Sequence[float], v2: Sequence[float]) -> bool:
    """Check whether two 3-component vectors are equal within EPSILON.

    All three components are compared; the result is their conjunction.

    Args:
        v1: First vector.
        v2: Second vector.

    Returns:
        True if every component pair is equal.
    """
    res = equal(v1[0], v2[0])
    for axis in range(1, 3):
        res = equal(v1[axis], v2[axis]) and res
    return res


def is_valid(value: float) -> bool:
    """Check that a floating point value is neither NaN nor infinite."""
    return not (math.isnan(value) or math.isinf(value))


@ti.func
def ti_equal(a: ti.f32, b: ti.f32) -> ti.i32:
    """Kernel-side equivalent of equal().

    Returns:
        1 if |a - b| < EPSILON, 0 otherwise.
    """
    res = 0
    if ti.abs(a - b) < EPSILON:
        res = 1
    return res


@ti.func
def ti_equal_vec3(v1: vec3, v2: vec3) -> ti.i32:
    """Kernel-side equivalent of equal_vec3().

    Returns:
        1 if all three components are equal within EPSILON, 0 otherwise.
    """
    res = ti_equal(v1[0], v2[0])
    for axis in ti.static(range(1, 3)):
        res = res & ti_equal(v1[axis], v2[axis])
    return res


@ti.func
def ti_is_valid(value: ti.f32) -> ti.i32:
    """Kernel-side equivalent of is_valid().

    Returns:
        1 if the value is finite, 0 if it is NaN or infinite.
    """
    res = 1
    if tm.isnan(value) or tm.isinf(value):
        res = 0
    return res
