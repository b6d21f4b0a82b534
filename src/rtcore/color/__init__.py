"""Packed color accumulation.

Components:
    packed: 0xAABBGGRR packing and the incremental running average
    progressive: Per-pixel packed buffer with progressive accumulation
    export: Unpacking and PNG output

Note: progressive is NOT imported here because it declares Taichi fields at
import time. Import it directly from src.rtcore.color.progressive.
"""

from .export import compute_rmse, save_packed_png, save_png, unpack_buffer
from .packed import (
    CHANNEL_MAX,
    OPAQUE_ALPHA,
    incremental_average,
    pack_color,
    ti_incremental_average,
    unpack_color,
)

__all__ = [
    # Packed
    "CHANNEL_MAX",
    "OPAQUE_ALPHA",
    "pack_color",
    "unpack_color",
    "incremental_average",
    "ti_incremental_average",
    # Export
    "unpack_buffer",
    "save_packed_png",
    "save_png",
    "compute_rmse",
]
