"""Tests for built-in scenes."""

import pytest
import numpy as np

from spherecast.vec3 import Vec3, Point3, Color
from spherecast.shapes import Sphere, HittableList
from spherecast.materials import Lambertian, Metal, Dielectric
from spherecast.scenes import choose_material, random_spheres_scene, cover_camera


class TestChooseMaterial:
    """Test the random-byte material policy."""

    @pytest.mark.parametrize("choice", [0, 100, 205])
    def test_diffuse(self, choice):
        mat = choose_material(choice, np.random.default_rng(0))
        assert isinstance(mat, Lambertian)
        assert all(0.0 <= c < 1.0 for c in mat.albedo)

    @pytest.mark.parametrize("choice", [206, 220, 243])
    def test_metal(self, choice):
        mat = choose_material(choice, np.random.default_rng(0))
        assert isinstance(mat, Metal)
        assert all(0.5 <= c < 1.0 for c in mat.albedo)
        assert 0.0 <= mat.fuzz < 0.5

    @pytest.mark.parametrize("choice", [244, 255])
    def test_glass(self, choice):
        mat = choose_material(choice, np.random.default_rng(0))
        assert mat == Dielectric(1.5)


class TestRandomSpheresScene:
    """Test the cover scene."""

    def test_ground_first(self):
        world = random_spheres_scene(np.random.default_rng(1))
        ground = list(world)[0]
        assert ground.center == Point3(0, -1000, 0)
        assert ground.radius == 1000
        assert ground.material == Lambertian(Color(0.5, 0.5, 0.5))

    def test_large_spheres_last(self):
        world = random_spheres_scene(np.random.default_rng(1))
        glass, matte, mirror = list(world)[-3:]
        assert isinstance(glass.material, Dielectric)
        assert isinstance(matte.material, Lambertian)
        assert isinstance(mirror.material, Metal)
        assert mirror.material.fuzz == 0.0
        assert all(s.radius == 1.0 for s in (glass, matte, mirror))

    def test_small_spheres_placement(self):
        world = random_spheres_scene(np.random.default_rng(2))
        small = list(world)[1:-3]
        # 22 x 22 grid minus the ones too close to the metal sphere
        assert 0 < len(small) <= 484
        for sphere in small:
            assert sphere.radius == 0.2
            assert sphere.center.y == 0.2
            assert (sphere.center - Point3(4, 0.2, 0)).length() > 0.9

    def test_reproducible(self):
        a = [s.center for s in random_spheres_scene(np.random.default_rng(3))]
        b = [s.center for s in random_spheres_scene(np.random.default_rng(3))]
        assert a == b


class TestCoverCamera:
    """Test the cover scene camera."""

    def test_parameters(self):
        cam = cover_camera(1.5)
        assert cam.origin == Point3(13, 2, 3)
        assert cam.lens_radius == 0.05
        # Looks toward the origin
        assert cam.w == Vec3(13, 2, 3).normalize()
