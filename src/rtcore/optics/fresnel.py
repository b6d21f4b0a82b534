"""Fresnel reflectance at dielectric boundaries.

This module computes the exact (unpolarized) Fresnel reflectance used to split
light between reflection and refraction when a ray hits glass, water or any
other dielectric.

Key physics:
    - Snell's law: eta_i * sin(theta_i) = eta_t * sin(theta_t)
    - Total internal reflection when sin(theta_t) >= 1
    - Reflectance is the mean of the s- and p-polarized terms
    - Transmittance follows from energy conservation: kt = 1 - kr

Example:
    >>> from src.rtcore.optics.fresnel import fresnel
    >>> round(fresnel((0.0, -1.0, 0.0), (0.0, 1.0, 0.0), 1.5), 4)
    0.04
"""

import math
from collections.abc import Sequence

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors
vec3 = tm.vec3


def fresnel(incident: Sequence[float], normal: Sequence[float], ior: float) -> float:
    """Compute the fraction of light reflected at a dielectric interface.

    A positive cosine between the incident direction and the normal means the
    ray is leaving the medium, in which case the indices are swapped.

    Args:
        incident: The incident direction (should be normalized).
        normal: The surface normal (should be normalized).
        ior: Index of refraction of the material (must be > 0, not checked).

    Returns:
        The reflectance in [0, 1]. Exactly 1.0 on total internal reflection.
    """
    cos_i = sum(incident[axis] * normal[axis] for axis in range(3))
    cos_i = min(max(cos_i, -1.0), 1.0)

    eta_i = 1.0
    eta_t = ior
    if cos_i > 0.0:
        eta_i, eta_t = eta_t, eta_i

    # Compute sin of the transmitted angle using Snell's law
    sin_t = eta_i / eta_t * math.sqrt(max(0.0, 1.0 - cos_i * cos_i))

    # Total internal reflection
    if sin_t >= 1.0:
        return 1.0

    cos_t = math.sqrt(max(0.0, 1.0 - sin_t * sin_t))
    cos_i = abs(cos_i)
    r_s = ((eta_t * cos_i) - (eta_i * cos_t)) / ((eta_t * cos_i) + (eta_i * cos_t))
    r_p = ((eta_i * cos_i) - (eta_t * cos_t)) / ((eta_i * cos_i) + (eta_t * cos_t))
    return (r_s * r_s + r_p * r_p) / 2.0


def transmittance(incident: Sequence[float], normal: Sequence[float], ior: float) -> float:
    """Compute the fraction of light refracted through the interface.

    Returns:
        1 - fresnel(incident, normal, ior).
    """
    return 1.0 - fresnel(incident, normal, ior)


@ti.func
def ti_fresnel(incident: vec3, normal: vec3, ior: ti.f32) -> ti.f32:
    """Kernel-side equivalent of fresnel().

    Args:
        incident: The incident direction (should be normalized).
        normal: The surface normal (should be normalized).
        ior: Index of refraction of the material.

    Returns:
        The reflectance in [0, 1].
    """
    cos_i = tm.clamp(tm.dot(incident, normal), -1.0, 1.0)

    eta_i = 1.0
    eta_t = ior
    if cos_i > 0.0:
        eta_i = ior
        eta_t = 1.0

    sin_t = eta_i / eta_t * ti.sqrt(tm.max(0.0, 1.0 - cos_i * cos_i))

    # Total internal reflection unless overwritten below
    kr = 1.0
    if sin_t < 1.0:
        cos_t = ti.sqrt(tm.max(0.0, 1.0 - sin_t * sin_t))
        abs_cos_i = ti.abs(cos_i)
        r_s = ((eta_t * abs_cos_i) - (eta_i * cos_t)) / ((eta_t * abs_cos_i) + (eta_i * cos_t))
        r_p = ((eta_i * abs_cos_i) - (eta_t * cos_t)) / ((eta_i * abs_cos_i) + (eta_t * cos_t))
        kr = (r_s * r_s + r_p * r_p) / 2.0
    return kr
