"""Numerics core for a progressive, sample-based ray tracer.

This package provides the small computational primitives that a Taichi-based
renderer calls for every sample, with support for:
- Low-discrepancy (Halton) sample placement
- Incremental color averaging into packed 32-bit pixels
- Fresnel reflectance at dielectric boundaries
- Epsilon comparisons and NaN/Inf guards
- Platform error diagnostics

Subpackages:
    core: Floating-point comparison, vector normalization, integer rounding
    sampling: Halton sequence and sub-pixel jitter
    optics: Fresnel reflectance
    color: Packed color averaging, progressive accumulation and export
    diagnostics: Platform error indicator checks and failure reports
"""

__version__ = "0.1.0"
