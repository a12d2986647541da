"""
Built-in scenes.

The cover scene: a field of small random spheres around three large ones
(glass, matte brown and polished metal) on a grey ground sphere.
"""

from __future__ import annotations
import numpy as np

from .vec3 import Vec3, Point3, Color
from .camera import Camera
from .shapes import Sphere, HittableList
from .materials import Material, Lambertian, Metal, Dielectric

# Material cutoffs for a random byte: [0, 205] diffuse, [206, 243] metal, rest glass
DIFFUSE_MAX = 205
METAL_MAX = 243


def choose_material(choice: int, rng: np.random.Generator) -> Material:
    """Pick a material for a small sphere from a random byte."""
    if choice <= DIFFUSE_MAX:
        albedo = Vec3.random(rng) * Vec3.random(rng)
        return Lambertian(albedo)
    if choice <= METAL_MAX:
        albedo = Vec3.random(rng, 0.5, 1.0)
        fuzz = rng.random() / 2.0
        return Metal(albedo, fuzz)
    return Dielectric(1.5)


def random_spheres_scene(rng: np.random.Generator) -> HittableList:
    """Build the cover scene.

    Args:
        rng: Random source for sphere placement and materials

    Returns:
        The scene, ground sphere first
    """
    world = HittableList()

    ground_material = Lambertian(Color(0.5, 0.5, 0.5))
    world.add(Sphere(Point3(0, -1000, 0), 1000, ground_material))

    keep_clear = Point3(4, 0.2, 0)
    for a in range(-11, 11):
        for b in range(-11, 11):
            choice = int(rng.integers(0, 256))
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())

            if (center - keep_clear).length() > 0.9:
                world.add(Sphere(center, 0.2, choose_material(choice, rng)))

    world.add(Sphere(Point3(0, 1, 0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))

    return world


def cover_camera(aspect_ratio: float) -> Camera:
    """Camera framing the cover scene, focused on the origin."""
    return Camera(
        look_from=Point3(13, 2, 3),
        look_at=Point3(0, 0, 0),
        vup=Vec3(0, 1, 0),
        vfov=20,
        aspect_ratio=aspect_ratio,
        aperture=0.1,
        focus_dist=10.0
    )
