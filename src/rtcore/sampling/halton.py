"""Halton low-discrepancy sequence for deterministic sample placement.

The Halton sequence reverses the digits of the sample index written in a
given base and mirrors them behind the radix point. Successive indices fill
[0, 1) far more evenly than pseudo-random numbers, which lowers noise for the
same sample count.

The generator is stateless: the same (index, base) always yields the same
value, so any number of parallel workers can call it without coordination.

Example:
    >>> from src.rtcore.sampling.halton import halton_sequence
    >>> [halton_sequence(i, 2) for i in range(4)]
    [0.0, 0.5, 0.25, 0.75]
"""

import math
from collections.abc import Sequence

import taichi as ti
import taichi.math as tm

# Type alias for 2D vectors
vec2 = tm.vec2

# First coprime bases, one per sampled dimension
DEFAULT_HALTON_BASES = (2, 3)

# Largest float32 below 1, the upper bound of kernel-side values
TI_HALTON_MAX = 0.99999994


def halton_sequence(index: int, base: int) -> float:
    """Compute the value of the Halton sequence at an index.

    Args:
        index: The position in the sequence (>= 0). Index 0 yields 0.
        base: The numerical base of the sequence (>= 2).

    Returns:
        A value in [0, 1).

    Raises:
        ValueError: If index is negative or base is less than 2.
    """
    if base < 2:
        raise ValueError(f"Halton base = {base} is less than 2")
    if index < 0:
        raise ValueError(f"Halton index = {index} is negative")

    fraction = 1.0
    value = 0.0
    while index > 0:
        fraction /= base
        value += fraction * (index % base)
        index //= base

    # Digit sums near the mantissa width round up to 1.0
    return min(value, math.nextafter(1.0, 0.0))


def halton_point(index: int, bases: Sequence[int] = DEFAULT_HALTON_BASES) -> tuple[float, ...]:
    """Compute a multidimensional Halton point.

    Each dimension uses its own base; the bases should be pairwise coprime
    so that the dimensions are not correlated.

    Args:
        index: The position in the sequence (>= 0).
        bases: One base per dimension. Defaults to (2, 3).

    Returns:
        A tuple with one coordinate in [0, 1) per base.
    """
    return tuple(halton_sequence(index, base) for base in bases)


@ti.func
def ti_halton(index: ti.i32, base: ti.i32) -> ti.f32:
    """Kernel-side equivalent of halton_sequence().

    Arguments are not validated; index must be >= 0 and base >= 2.
    """
    fraction = 1.0
    value = 0.0
    i = index
    inv_base = 1.0 / ti.cast(base, ti.f32)
    while i > 0:
        fraction *= inv_base
        value += fraction * ti.cast(i % base, ti.f32)
        i = i // base
    return ti.min(value, TI_HALTON_MAX)


@ti.func
def ti_halton_jitter(sample_index: ti.i32) -> vec2:
    """Sub-pixel offset in [0, 1)^2 for a sample.

    Uses bases 2 and 3 so that successive samples of the same pixel are
    spread evenly over the pixel area.

    Example:
        @ti.kernel
        def render(sample_index: ti.i32):
            for i, j in image:
                offset = ti_halton_jitter(sample_index)
                u = (ti.cast(i, ti.f32) + offset.x) / width
    """
    return vec2(ti_halton(sample_index, 2), ti_halton(sample_index, 3))
