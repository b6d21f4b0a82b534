"""Progressive accumulation of samples into a packed pixel buffer.

This module owns the per-pixel buffer of packed 0xAABBGGRR words that the
incremental averaging scheme is designed for, and provides:
- A preallocated packed buffer and per-pixel sample counts (Taichi fields)
- A parallel accumulation pass that sanitizes, rescales and averages samples
- Batch accumulation with progress callbacks or a generator
- Reset, resize and NumPy readback in image orientation

Samples are handed over as NumPy arrays of shape (height, width, 3) with the
top row first. The fields use a bottom-left origin like the Taichi render
targets they sit next to, so the conversion happens here.

Example:
    >>> import numpy as np
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.rtcore.color.progressive import PackedAccumulator
    >>>
    >>> accumulator = PackedAccumulator(64, 48)
    >>> accumulator.accumulate(np.full((48, 64, 3), 0.5, dtype=np.float32))
    >>> accumulator.sample_count
    1
"""

from collections.abc import Callable, Generator, Iterable

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.rtcore.color.export import unpack_buffer
from src.rtcore.color.packed import ti_incremental_average
from src.rtcore.core.compare import ti_is_valid
from src.rtcore.core.rounding import round_down_to_multiple_of
from src.rtcore.core.vectors import ti_normalize_color

# Type alias for 3D vectors
vec3 = tm.vec3

# Type alias for progress callback
# Callback receives (current_samples, total_target_samples)
ProgressCallback = Callable[[int, int], None]

# =============================================================================
# Packed Render Target
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Image dimensions (actual active size)
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Packed 0xAABBGGRR running averages (preallocated to max size)
_packed_buffer = ti.field(dtype=ti.u32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

# Sample count per pixel (preallocated to max size)
_sample_count = ti.field(dtype=ti.i32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

# Flag to track if the packed target is initialized
_target_initialized = ti.field(dtype=ti.i32, shape=())

# The PackedAccumulator that last set up the target
_active_accumulator = None


def setup_packed_target(width: int, height: int) -> None:
    """Initialize the packed buffers.

    Sets the active image dimensions and clears the buffers.

    Args:
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels (max MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions are not positive or exceed the maximum.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions ({width}x{height}) must be positive")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _target_initialized[None] = 1

    clear_packed_target()


def clear_packed_target() -> None:
    """Clear the packed buffer and sample counts to zero."""
    _packed_buffer.fill(0)
    _sample_count.fill(0)


def get_packed_dimensions() -> tuple[int, int]:
    """Get the current packed target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def _check_packed_target_initialized() -> None:
    """Check if the packed target is initialized and raise if not."""
    if _target_initialized[None] == 0:
        raise RuntimeError("Packed target not set up. Call setup_packed_target() first.")


@ti.kernel
def _accumulate_pass(samples: ti.types.ndarray(), width: ti.i32, height: ti.i32):
    """Fold one sample per pixel into the packed buffer.

    Args:
        samples: Float32 array of shape (width, height, 3), bottom-left origin.
        width: Image width in pixels.
        height: Image height in pixels.
    """
    for i, j in ti.ndrange(width, height):
        color = vec3(samples[i, j, 0], samples[i, j, 1], samples[i, j, 2])

        # Replace NaN/Inf with zero
        for c in ti.static(range(3)):
            if ti_is_valid(color[c]) == 0:
                color[c] = 0.0

        # Keep channel ratios for over-bright samples
        color = ti_normalize_color(color)

        _sample_count[i, j] += 1
        n = ti.cast(_sample_count[i, j], ti.u32)
        _packed_buffer[i, j] = ti_incremental_average(color, _packed_buffer[i, j], n)


def get_packed_numpy() -> npt.NDArray[np.uint32]:
    """Get the packed buffer as a NumPy array in image orientation.

    Returns:
        Array of shape (height, width) with dtype uint32.

    Raises:
        RuntimeError: If the packed target has not been set up.
    """
    _check_packed_target_initialized()

    width, height = get_packed_dimensions()
    full = _packed_buffer.to_numpy()

    # Transpose from (width, height) to (height, width), then flip to top-left origin
    packed = np.flipud(np.transpose(full[:width, :height]))
    return np.ascontiguousarray(packed, dtype=np.uint32)


class PackedAccumulator:
    """Progressive accumulator writing packed 32-bit pixels.

    Wraps the module-level packed target, so only one accumulator is live at
    a time. Creating or resizing an accumulator takes over the target, and
    the accumulator it replaced raises RuntimeError when used.

    Provides:
    - Incremental accumulation of one sample per pixel per pass
    - Batch accumulation with progress callbacks or a generator
    - Reset and resize

    Attributes:
        width: Active image width in pixels.
        height: Active image height in pixels.
    """

    def __init__(self, width: int, height: int, tile: int | None = None) -> None:
        """Initialize the accumulator.

        Args:
            width: Image width in pixels (max 2048).
            height: Image height in pixels (max 2048).
            tile: Optional tile size; the active dimensions are rounded down
                to a multiple of it with round_down_to_multiple_of().

        Raises:
            ValueError: If dimensions are invalid or exceed the maximum.
        """
        self._tile = tile
        self.resize(width, height)

    @property
    def width(self) -> int:
        """Get the active image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the active image height."""
        return self._height

    @property
    def sample_count(self) -> int:
        """Get the number of samples accumulated per pixel.

        Every pass touches every pixel, so pixel (0, 0) is representative.
        """
        self._check_active()
        _check_packed_target_initialized()
        return int(_sample_count[0, 0])

    def reset(self) -> None:
        """Clear the buffer and sample counts for a new image."""
        self._check_active()
        clear_packed_target()

    def resize(self, width: int, height: int) -> None:
        """Resize the packed target and reset the accumulation.

        Args:
            width: New image width in pixels.
            height: New image height in pixels.

        Raises:
            ValueError: If dimensions are invalid or exceed the maximum.
        """
        global _active_accumulator

        if self._tile is not None:
            width = round_down_to_multiple_of(width, self._tile)
            height = round_down_to_multiple_of(height, self._tile)

        setup_packed_target(width, height)
        self._width = width
        self._height = height
        _active_accumulator = self

    def _check_active(self) -> None:
        """Raise if a newer accumulator has taken over the packed target."""
        if _active_accumulator is not self:
            raise RuntimeError(
                "PackedAccumulator was superseded by a newer instance; "
                "only one accumulator can own the packed target"
            )

    def accumulate(self, samples: npt.ArrayLike) -> None:
        """Fold one sample per pixel into the running averages.

        Args:
            samples: Linear RGB samples of shape (height, width, 3), top row
                first. NaN/Inf channels count as 0 and over-bright samples
                are rescaled so their brightest channel is 1.

        Raises:
            ValueError: If the array shape does not match the image.
        """
        self._check_active()
        image = np.asarray(samples, dtype=np.float32)
        expected = (self._height, self._width, 3)
        if image.shape != expected:
            raise ValueError(f"Sample shape {image.shape} does not match image shape {expected}")

        # (height, width, 3) top-left origin -> (width, height, 3) bottom-left origin
        buffer_order = np.ascontiguousarray(np.transpose(np.flipud(image), (1, 0, 2)))
        _accumulate_pass(buffer_order, self._width, self._height)

    def accumulate_many(
        self,
        passes: Iterable[npt.ArrayLike],
        callback: ProgressCallback | None = None,
    ) -> None:
        """Accumulate several passes with an optional progress callback.

        Args:
            passes: Sample images, each of shape (height, width, 3).
            callback: Optional callback called after each pass. Receives
                (current_total_samples, target_total_samples).
        """
        batch = list(passes)
        target_samples = self.sample_count + len(batch)

        for samples in batch:
            self.accumulate(samples)
            if callback is not None:
                callback(self.sample_count, target_samples)

    def accumulate_progressive(
        self,
        passes: Iterable[npt.ArrayLike],
    ) -> Generator[tuple[int, int], None, None]:
        """Accumulate passes, yielding progress after each one.

        Yields:
            Tuple of (current_total_samples, target_total_samples).
        """
        batch = list(passes)
        target_samples = self.sample_count + len(batch)

        for samples in batch:
            self.accumulate(samples)
            yield (self.sample_count, target_samples)

    def get_packed_numpy(self) -> npt.NDArray[np.uint32]:
        """Get the packed words, shape (height, width), dtype uint32."""
        self._check_active()
        return get_packed_numpy()

    def get_image_uint8(self) -> npt.NDArray[np.uint8]:
        """Get the averaged image as 8-bit RGB, shape (height, width, 3)."""
        return unpack_buffer(self.get_packed_numpy())[:, :, :3]

    def get_image_numpy(self) -> npt.NDArray[np.float32]:
        """Get the averaged image as float32 RGB in [0, 1]."""
        return (self.get_image_uint8() / 255.0).astype(np.float32)

    def __repr__(self) -> str:
        """Return a string representation of the accumulator state."""
        if _active_accumulator is not self:
            return f"PackedAccumulator(width={self.width}, height={self.height}, superseded)"
        return (
            f"PackedAccumulator(width={self.width}, height={self.height}, "
            f"samples={self.sample_count})"
        )
