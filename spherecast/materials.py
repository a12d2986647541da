"""
Materials and their scattering behavior.

Implements:
- Lambertian diffuse
- Metal (specular reflection with fuzz)
- Dielectric (glass, water - with refraction)

Materials are immutable and may be shared by any number of spheres. The set
is closed; `scatter` is the single dispatch point for all of them.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union
import math

import numpy as np

from .vec3 import Vec3, Color
from .ray import Ray
from .shapes import HitRecord


@dataclass(frozen=True)
class ScatterResult:
    """Result of a material scatter operation."""
    attenuation: Color
    scattered_ray: Ray


@dataclass(frozen=True)
class Lambertian:
    """Diffuse material with Lambertian (ideal matte) scattering.

    Attributes:
        albedo: The base color (RGB, each component 0-1)
    """
    albedo: Color


@dataclass(frozen=True)
class Metal:
    """Metallic material with specular reflection.

    Attributes:
        albedo: The reflection color
        fuzz: Reflection roughness (0 = mirror, 1 = very rough)
    """
    albedo: Color
    fuzz: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, 'fuzz', min(self.fuzz, 1.0))


@dataclass(frozen=True)
class Dielectric:
    """Dielectric (glass-like) material with refraction.

    Attributes:
        ior: Index of refraction (1.0 = air, 1.5 = glass, 2.4 = diamond)
    """
    ior: float = 1.5


Material = Union[Lambertian, Metal, Dielectric]


def scatter(
    material: Material,
    ray_in: Ray,
    hit: HitRecord,
    rng: np.random.Generator
) -> Optional[ScatterResult]:
    """Compute the scattered ray and attenuation for a surface hit.

    Args:
        material: Material at the hit point
        ray_in: The incoming ray
        hit: Intersection record (normal faces against ray_in)
        rng: Random source of the calling render task

    Returns:
        ScatterResult if the ray scatters, None if it is absorbed
    """
    if isinstance(material, Lambertian):
        return _scatter_lambertian(material, hit, rng)
    if isinstance(material, Metal):
        return _scatter_metal(material, ray_in, hit, rng)
    if isinstance(material, Dielectric):
        return _scatter_dielectric(material, ray_in, hit, rng)
    raise TypeError(f"Unknown material: {type(material).__name__}")


def _scatter_lambertian(mat: Lambertian, hit: HitRecord, rng: np.random.Generator) -> ScatterResult:
    scatter_direction = hit.normal + Vec3.random_unit_vector(rng)

    # Catch degenerate scatter direction
    if scatter_direction.near_zero():
        scatter_direction = hit.normal

    return ScatterResult(
        attenuation=mat.albedo,
        scattered_ray=Ray(hit.point, scatter_direction)
    )


def _scatter_metal(
    mat: Metal,
    ray_in: Ray,
    hit: HitRecord,
    rng: np.random.Generator
) -> Optional[ScatterResult]:
    reflected = ray_in.direction.normalize().reflect(hit.normal)
    if mat.fuzz > 0:
        reflected = reflected + Vec3.random_in_unit_sphere(rng) * mat.fuzz

    # Reflections that dip below the surface are absorbed
    if reflected.dot(hit.normal) <= 0:
        return None
    return ScatterResult(
        attenuation=mat.albedo,
        scattered_ray=Ray(hit.point, reflected)
    )


def _scatter_dielectric(
    mat: Dielectric,
    ray_in: Ray,
    hit: HitRecord,
    rng: np.random.Generator
) -> ScatterResult:
    refraction_ratio = 1.0 / mat.ior if hit.front_face else mat.ior

    unit_direction = ray_in.direction.normalize()
    cos_theta = min(-unit_direction.dot(hit.normal), 1.0)
    sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)

    cannot_refract = refraction_ratio * sin_theta > 1.0

    if cannot_refract or reflectance(cos_theta, refraction_ratio) > rng.random():
        direction = unit_direction.reflect(hit.normal)
    else:
        direction = unit_direction.refract(hit.normal, refraction_ratio)

    return ScatterResult(
        attenuation=Color(1.0, 1.0, 1.0),
        scattered_ray=Ray(hit.point, direction)
    )


def reflectance(cosine: float, ref_idx: float) -> float:
    """Schlick's approximation for reflectance."""
    r0 = (1 - ref_idx) / (1 + ref_idx)
    r0 = r0 * r0
    return r0 + (1 - r0) * pow(1 - cosine, 5)
