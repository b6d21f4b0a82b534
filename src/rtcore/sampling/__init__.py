"""Deterministic sample placement."""

from .halton import (
    DEFAULT_HALTON_BASES,
    halton_point,
    halton_sequence,
    ti_halton,
    ti_halton_jitter,
)

__all__ = [
    "DEFAULT_HALTON_BASES",
    "halton_sequence",
    "halton_point",
    "ti_halton",
    "ti_halton_jitter",
]
