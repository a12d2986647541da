"""Tests for geometric shapes."""

import pytest
import math
import numpy as np

from spherecast.vec3 import Vec3, Point3, Color
from spherecast.ray import Ray
from spherecast.shapes import Sphere, HittableList, HitRecord
from spherecast.materials import Lambertian


GREY = Lambertian(Color(0.5, 0.5, 0.5))


class TestSphere:
    """Test Sphere class."""

    def test_creation(self):
        center = Point3(0, 0, 0)
        sphere = Sphere(center, 1.0, GREY)
        assert sphere.center == center
        assert sphere.radius == 1.0
        assert sphere.material is GREY

    def test_hit_through_center(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, GREY)
        ray = Ray(Point3(0, 0, -5), Vec3(0, 0, 1))
        hit = sphere.hit(ray, 0.001, float('inf'))

        assert hit is not None
        assert abs(hit.t - 4.0) < 1e-6  # Hits at z=-1
        assert abs(hit.point.z - (-1.0)) < 1e-6

    def test_roots_symmetric_about_closest_approach(self):
        sphere = Sphere(Point3(0, 0, 0), 2.0, GREY)
        direction = Vec3(1, 2, -1).normalize()
        origin = direction * -10
        ray = Ray(origin, direction)

        near = sphere.hit(ray, 0.001, float('inf'))
        far = sphere.hit(ray, near.t, float('inf'))
        assert near is not None and far is not None
        # Closest approach to the center is at t=10
        assert abs((near.t + far.t) / 2 - 10.0) < 1e-9
        assert abs(far.t - near.t - 4.0) < 1e-9

    def test_hit_front_face(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, GREY)
        ray = Ray(Point3(0, 0, -5), Vec3(0, 0, 1))
        hit = sphere.hit(ray, 0.001, float('inf'))

        assert hit is not None
        assert hit.front_face is True
        assert hit.normal == Vec3(0, 0, -1)

    def test_hit_from_inside(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, GREY)
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, 1))
        hit = sphere.hit(ray, 0.001, float('inf'))

        assert hit is not None
        assert hit.front_face is False
        # Flipped to face the ray
        assert hit.normal == Vec3(0, 0, -1)

    def test_normal_opposes_ray(self):
        sphere = Sphere(Point3(0.3, -0.2, 0.1), 1.5, GREY)
        rng = np.random.default_rng(11)
        hits = 0
        for _ in range(200):
            origin = Vec3.random(rng, -3, 3)
            direction = Vec3.random_unit_vector(rng)
            hit = sphere.hit(Ray(origin, direction), 0.001, float('inf'))
            if hit is not None:
                hits += 1
                assert hit.normal.dot(direction) <= 0
                assert abs(hit.normal.length() - 1.0) < 1e-9
        assert hits > 0

    def test_miss(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, GREY)
        ray = Ray(Point3(0, 5, -5), Vec3(0, 0, 1))  # Ray passes above sphere
        assert sphere.hit(ray, 0.001, float('inf')) is None

    def test_miss_just_outside_radius(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, GREY)
        ray = Ray(Point3(1.0001, 0, -5), Vec3(0, 0, 1))
        assert sphere.hit(ray, 0.001, float('inf')) is None

    def test_behind_ray(self):
        sphere = Sphere(Point3(0, 0, -5), 1.0, GREY)
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, 1))  # Ray points away from sphere
        assert sphere.hit(ray, 0.001, float('inf')) is None

    def test_t_range(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, GREY)
        ray = Ray(Point3(0, 0, -5), Vec3(0, 0, 1))

        # Hit is at t=4, exclude it with t_min
        hit = sphere.hit(ray, 4.5, float('inf'))
        assert hit is not None
        assert abs(hit.t - 6.0) < 1e-9

    def test_t_max_excludes_both_roots(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, GREY)
        ray = Ray(Point3(0, 0, -5), Vec3(0, 0, 1))
        assert sphere.hit(ray, 0.001, 3.0) is None

    def test_interval_is_open(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, GREY)
        ray = Ray(Point3(0, 0, -5), Vec3(0, 0, 1))
        assert sphere.hit(ray, 0.001, 4.0) is None

    def test_unnormalized_direction(self):
        sphere = Sphere(Point3(0, 0, 0), 1.0, GREY)
        ray = Ray(Point3(0, 0, -5), Vec3(0, 0, 2))
        hit = sphere.hit(ray, 0.001, float('inf'))
        assert abs(hit.t - 2.0) < 1e-9
        assert abs(hit.point.z + 1.0) < 1e-9

    def test_with_material(self):
        material = Lambertian(Color(1, 0, 0))
        sphere = Sphere(Point3(0, 0, 0), 1.0, material)
        ray = Ray(Point3(0, 0, -5), Vec3(0, 0, 1))
        hit = sphere.hit(ray, 0.001, float('inf'))

        assert hit is not None
        assert hit.material is material


class TestHitRecord:
    """Test HitRecord construction."""

    def test_from_outward_front(self):
        ray = Ray(Point3(0, 0, 5), Vec3(0, 0, -1))
        rec = HitRecord.from_outward(ray, 4.0, Point3(0, 0, 1), Vec3(0, 0, 1), GREY)
        assert rec.front_face is True
        assert rec.normal == Vec3(0, 0, 1)

    def test_from_outward_back(self):
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, 1))
        rec = HitRecord.from_outward(ray, 1.0, Point3(0, 0, 1), Vec3(0, 0, 1), GREY)
        assert rec.front_face is False
        assert rec.normal == Vec3(0, 0, -1)

    def test_is_immutable(self):
        ray = Ray(Point3(0, 0, 5), Vec3(0, 0, -1))
        rec = HitRecord.from_outward(ray, 4.0, Point3(0, 0, 1), Vec3(0, 0, 1), GREY)
        with pytest.raises(AttributeError):
            rec.t = 1.0


class TestHittableList:
    """Test HittableList class."""

    def test_empty_list(self):
        world = HittableList()
        ray = Ray(Point3(0, 0, 0), Vec3(1, 0, 0))
        assert world.hit(ray, 0.001, float('inf')) is None

    def test_hit_closest(self):
        world = HittableList()
        world.add(Sphere(Point3(0, 0, -10), 1.0, GREY))  # Farther, added first
        world.add(Sphere(Point3(0, 0, -5), 1.0, GREY))  # Closer

        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, -1))
        hit = world.hit(ray, 0.001, float('inf'))

        assert hit is not None
        assert abs(hit.point.z - (-4.0)) < 1e-6  # Should hit closer sphere

    def test_nearest_equals_minimum_member_t(self):
        spheres = [
            Sphere(Point3(0, 0, -6), 2.0, GREY),
            Sphere(Point3(0, 0.5, -4), 1.0, GREY),
            Sphere(Point3(0, 0, -9), 3.0, GREY),
        ]
        world = HittableList(spheres)
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0.05, -1))

        member_ts = [h.t for h in (s.hit(ray, 0.001, float('inf')) for s in spheres) if h]
        hit = world.hit(ray, 0.001, float('inf'))
        assert len(member_ts) == 3
        assert hit.t == min(member_ts)

    def test_material_of_nearest_member(self):
        red = Lambertian(Color(1, 0, 0))
        blue = Lambertian(Color(0, 0, 1))
        world = HittableList([
            Sphere(Point3(0, 0, -10), 1.0, blue),
            Sphere(Point3(0, 0, -5), 1.0, red),
        ])
        hit = world.hit(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)), 0.001, float('inf'))
        assert hit.material is red

    def test_respects_t_max(self):
        world = HittableList([Sphere(Point3(0, 0, -5), 1.0, GREY)])
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, -1))
        assert world.hit(ray, 0.001, 3.0) is None

    def test_nested_list(self):
        inner = HittableList([Sphere(Point3(0, 0, -5), 1.0, GREY)])
        world = HittableList([inner, Sphere(Point3(0, 0, -10), 1.0, GREY)])
        hit = world.hit(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)), 0.001, float('inf'))
        assert abs(hit.t - 4.0) < 1e-9

    def test_add_rejects_non_hittable(self):
        world = HittableList()
        with pytest.raises(TypeError):
            world.add("sphere")

    def test_iteration(self):
        s1 = Sphere(Point3(0, 0, 0), 1.0, GREY)
        s2 = Sphere(Point3(1, 0, 0), 1.0, GREY)
        world = HittableList()
        world.add(s1)
        world.add(s2)

        assert len(world) == 2
        assert list(world) == [s1, s2]


class TestNumericalStability:
    """Test edge cases and numerical stability."""

    def test_grazing_ray(self):
        """Ray that barely grazes the sphere surface."""
        sphere = Sphere(Point3(0, 0, 0), 1.0, GREY)
        ray = Ray(Point3(0, 1, -5), Vec3(0, 0, 1))
        hit = sphere.hit(ray, 0.001, float('inf'))

        if hit is not None:
            assert abs(hit.point.y - 1.0) < 1e-3

    def test_very_small_sphere(self):
        sphere = Sphere(Point3(0, 0, 0), 1e-6, GREY)
        ray = Ray(Point3(0, 0, -1), Vec3(0, 0, 1))
        assert sphere.hit(ray, 0.001, float('inf')) is not None

    def test_very_large_sphere(self):
        sphere = Sphere(Point3(0, 0, 0), 1e6, GREY)
        ray = Ray(Point3(0, 0, -2e6), Vec3(0, 0, 1))
        assert sphere.hit(ray, 0.001, float('inf')) is not None
