"""Export utilities for packed pixel buffers.

This module converts buffers of packed 0xAABBGGRR words into 8-bit channel
arrays and saves them as images.

Supported formats:
    - PNG (8-bit RGB or RGBA via Pillow)

Example:
    >>> from src.rtcore.color.export import save_png
    >>> from src.rtcore.color.progressive import PackedAccumulator
    >>>
    >>> accumulator = PackedAccumulator(512, 512)
    >>> accumulator.accumulate(samples)
    >>> save_png(accumulator, "output.png")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

if TYPE_CHECKING:
    from src.rtcore.color.progressive import PackedAccumulator


def unpack_buffer(packed: npt.ArrayLike) -> npt.NDArray[np.uint8]:
    """Split an array of packed words into 8-bit channels.

    Args:
        packed: Array of shape (H, W) holding 0xAABBGGRR words. Signed 32-bit
            buffers are reinterpreted as unsigned.

    Returns:
        Array of shape (H, W, 4) with channels ordered (R, G, B, A).

    Raises:
        ValueError: If the array is not two-dimensional.
    """
    words = np.asarray(packed)
    if words.ndim != 2:
        raise ValueError(f"Packed buffer must be 2D, got shape {words.shape}")

    words = words.astype(np.int64) & 0xFFFFFFFF
    shifts = np.array([0, 8, 16, 24], dtype=np.int64)
    channels = (words[:, :, np.newaxis] >> shifts) & 0xFF
    return channels.astype(np.uint8)


def save_packed_png(
    packed: npt.ArrayLike,
    filepath: str,
    *,
    alpha: bool = False,
) -> None:
    """Save a packed buffer as a PNG file.

    Args:
        packed: Array of shape (H, W) holding 0xAABBGGRR words.
        filepath: Output file path (should end in .png).
        alpha: If True, keep the alpha channel and write RGBA.
    """
    channels = unpack_buffer(packed)

    if alpha:
        pil_image = PILImage.fromarray(channels)
    else:
        pil_image = PILImage.fromarray(np.ascontiguousarray(channels[:, :, :3]))
    pil_image.save(filepath)


def save_png(
    accumulator: PackedAccumulator,
    filepath: str,
    *,
    alpha: bool = False,
) -> None:
    """Save the accumulator's current averages as a PNG file.

    Args:
        accumulator: The PackedAccumulator to save.
        filepath: Output file path (should end in .png).
        alpha: If True, keep the alpha channel and write RGBA.
    """
    save_packed_png(accumulator.get_packed_numpy(), filepath, alpha=alpha)


def compute_rmse(
    image_a: npt.NDArray[np.number],
    image_b: npt.NDArray[np.number],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
