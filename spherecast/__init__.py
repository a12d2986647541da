"""
SphereCast - A Python Ray Tracing Renderer

Renders still images of sphere scenes with:
- Recursive path tracing with Monte-Carlo antialiasing
- Lambertian, metal and dielectric (glass) materials
- Thin-lens camera with depth of field
- Row-parallel rendering with per-row random streams
- PPM and Pillow-backed image output
"""

__version__ = "0.1.0"

from .vec3 import Vec3, Point3, Color
from .ray import Ray
from .shapes import Sphere, HittableList, HitRecord, Hittable
from .materials import Material, Lambertian, Metal, Dielectric, ScatterResult, scatter
from .camera import Camera
from .renderer import (
    Renderer, RenderSettings, RenderError,
    ray_color, render_row, row_rng, gamma_correct, to_ldr
)
from .output import write_ppm, save_image
from .scenes import random_spheres_scene, cover_camera
