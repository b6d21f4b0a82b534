"""Incremental color averaging into packed 32-bit pixels.

A pixel's running average is stored as a single 32-bit word laid out as
``0xAABBGGRR``: alpha in the most significant byte, then blue, green and red
in the least significant byte. Alpha is always 0xFF for opaque renders.

Each new sample is folded in with the integer running mean

    new = ((n - 1) * old + sample) / n

so no per-sample history is kept. With n = 1 the old value has no weight and
the first sample sets the color exactly.

Example:
    >>> from src.rtcore.color.packed import incremental_average, unpack_color
    >>> word = incremental_average((1.0, 0.5, 0.0), 0, 1)
    >>> unpack_color(word)
    (255, 127, 0, 255)
"""

import math
from collections.abc import Sequence

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors
vec3 = tm.vec3

# Alpha written into every accumulated pixel
OPAQUE_ALPHA = 0xFF

# Maximum value of one 8-bit channel
CHANNEL_MAX = 255


def pack_color(red: int, green: int, blue: int, alpha: int = OPAQUE_ALPHA) -> int:
    """Pack four 8-bit channels into a 0xAABBGGRR word.

    Args:
        red: Red channel in [0, 255].
        green: Green channel in [0, 255].
        blue: Blue channel in [0, 255].
        alpha: Alpha channel in [0, 255]. Default is opaque.

    Returns:
        The packed word as an unsigned 32-bit integer.

    Raises:
        ValueError: If any channel is outside [0, 255].
    """
    for name, channel in (("red", red), ("green", green), ("blue", blue), ("alpha", alpha)):
        if not 0 <= channel <= CHANNEL_MAX:
            raise ValueError(f"{name} channel = {channel} is outside [0, {CHANNEL_MAX}]")
    return (alpha << 24) | (blue << 16) | (green << 8) | red


def unpack_color(word: int) -> tuple[int, int, int, int]:
    """Split a 0xAABBGGRR word into its channels.

    Signed words (as stored by 32-bit signed buffers) are accepted.

    Returns:
        A tuple (red, green, blue, alpha).
    """
    word &= 0xFFFFFFFF
    return (
        word & 0xFF,
        (word >> 8) & 0xFF,
        (word >> 16) & 0xFF,
        (word >> 24) & 0xFF,
    )


def _scale_channel(value: float) -> int:
    # Non-finite radiance contributes nothing
    if math.isnan(value) or math.isinf(value):
        return 0
    return max(int(value * CHANNEL_MAX), 0)


def incremental_average(sample: Sequence[float], previous: int, sample_count: int) -> int:
    """Fold a new sample into a pixel's packed running average.

    The stored alpha of ``previous`` is ignored and the result is always
    opaque. Division truncates and each channel is clamped to 255.

    Args:
        sample: The new (r, g, b) sample, each channel in [0, 1].
        previous: The packed average of the previous sample_count - 1 samples.
        sample_count: Number of samples including this one (>= 1).

    Returns:
        The new packed average as an unsigned 32-bit integer.

    Raises:
        ValueError: If sample_count is less than 1.
    """
    if sample_count < 1:
        raise ValueError(f"Sample count = {sample_count} is less than 1")

    last_red, last_green, last_blue, _ = unpack_color(previous)
    weight = sample_count - 1

    channels = []
    for last, value in zip((last_red, last_green, last_blue), sample[:3]):
        current = (weight * last + _scale_channel(value)) // sample_count
        channels.append(min(current, CHANNEL_MAX))

    return pack_color(channels[0], channels[1], channels[2])


@ti.func
def ti_incremental_average(sample: vec3, previous: ti.u32, sample_count: ti.u32) -> ti.u32:
    """Kernel-side equivalent of incremental_average().

    The sample must already be finite; negative channels are raised to 0.

    Args:
        sample: The new (r, g, b) sample.
        previous: The packed previous average.
        sample_count: Number of samples including this one (>= 1).

    Returns:
        The new packed average.
    """
    mask = ti.u32(0xFF)
    last_red = previous & mask
    last_green = (previous >> ti.u32(8)) & mask
    last_blue = (previous >> ti.u32(16)) & mask

    scaled = tm.max(sample * 255.0, vec3(0.0, 0.0, 0.0))
    sample_red = ti.cast(scaled.x, ti.u32)
    sample_green = ti.cast(scaled.y, ti.u32)
    sample_blue = ti.cast(scaled.z, ti.u32)

    weight = sample_count - ti.u32(1)
    red = ti.min((weight * last_red + sample_red) // sample_count, mask)
    green = ti.min((weight * last_green + sample_green) // sample_count, mask)
    blue = ti.min((weight * last_blue + sample_blue) // sample_count, mask)

    alpha = ti.u32(OPAQUE_ALPHA) << ti.u32(24)
    return alpha | (blue << ti.u32(16)) | (green << ti.u32(8)) | red
