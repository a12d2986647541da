"""
Geometric shapes for the ray tracer.

The set of hittables is closed: a Sphere, or a HittableList of spheres
(and nested lists). Every `hit` returns a fresh HitRecord by value, or None
on a miss.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Union, TYPE_CHECKING
import math

from .vec3 import Vec3, Point3
from .ray import Ray

if TYPE_CHECKING:
    from .materials import Material


@dataclass(frozen=True)
class HitRecord:
    """Stores information about a ray-object intersection.

    Attributes:
        point: The intersection point in world space
        normal: The unit surface normal at the intersection (always points against ray)
        t: The ray parameter at intersection
        front_face: True if ray hit from outside the object
        material: The material at the hit point
    """
    point: Point3
    normal: Vec3
    t: float
    front_face: bool
    material: Material

    @classmethod
    def from_outward(
        cls,
        ray: Ray,
        t: float,
        point: Point3,
        outward_normal: Vec3,
        material: Material
    ) -> HitRecord:
        """Build a record whose normal points against the incoming ray.

        Args:
            ray: The incoming ray
            t: Ray parameter of the hit
            point: Hit position
            outward_normal: The geometric normal pointing outward from surface
            material: Material of the hit object
        """
        front_face = ray.direction.dot(outward_normal) < 0
        normal = outward_normal if front_face else -outward_normal
        return cls(point=point, normal=normal, t=t, front_face=front_face, material=material)


class Sphere:
    """A sphere defined by center, radius and material."""

    __slots__ = ('center', 'radius', 'material')

    def __init__(self, center: Point3, radius: float, material: Material):
        """Create a sphere.

        Args:
            center: Center point of the sphere
            radius: Radius of the sphere
            material: Material for shading, shared by reference
        """
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        """Test ray-sphere intersection using the quadratic formula.

        The equation (P-C)·(P-C) = r² where P = ray.at(t)
        expands to: t²(d·d) + 2t(d·(O-C)) + (O-C)·(O-C) - r² = 0
        which is the quadratic at² + bt + c = 0. The nearer root is tried
        first; a root is accepted only strictly inside (t_min, t_max).
        """
        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        half_b = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = half_b * half_b - a * c
        if discriminant < 0:
            return None

        sqrtd = math.sqrt(discriminant)

        root = (-half_b - sqrtd) / a
        if root <= t_min or root >= t_max:
            root = (-half_b + sqrtd) / a
            if root <= t_min or root >= t_max:
                return None

        point = ray.at(root)
        outward_normal = (point - self.center) / self.radius
        return HitRecord.from_outward(ray, root, point, outward_normal, self.material)

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"


class HittableList:
    """The scene: an ordered collection of hittable objects.

    Read-only once rendering starts; concurrent `hit` calls need no locking.
    """

    def __init__(self, objects: Optional[Iterable[Hittable]] = None):
        self.objects: list[Hittable] = []
        if objects is not None:
            self.extend(objects)

    def add(self, obj: Hittable) -> None:
        """Add an object to the list."""
        if not isinstance(obj, (Sphere, HittableList)):
            raise TypeError(f"Not a hittable object: {type(obj).__name__}")
        self.objects.append(obj)

    def extend(self, objects: Iterable[Hittable]) -> None:
        """Add several objects in order."""
        for obj in objects:
            self.add(obj)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        """Find the closest intersection among all objects."""
        closest_hit: Optional[HitRecord] = None
        closest_t = t_max

        for obj in self.objects:
            hit_record = obj.hit(ray, t_min, closest_t)
            if hit_record is not None:
                closest_hit = hit_record
                closest_t = hit_record.t

        return closest_hit

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)


Hittable = Union[Sphere, HittableList]
