"""Optics helpers for dielectric light transport."""

from .fresnel import fresnel, ti_fresnel, transmittance

__all__ = [
    "fresnel",
    "transmittance",
    "ti_fresnel",
]
