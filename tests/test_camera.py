"""Unit tests for the camera.

Tests cover:
- Derived viewport geometry after initialize()
- Configuration validation and the initialization precondition
- Primary ray generation with and without defocus blur
- Shading: bounce budget, sky gradient, absorption
- Gamma encoding and quantization
"""

import math

import pytest

from camera.camera import SKY_BLUE, Camera, background, linear_to_gamma, to_rgb
from core.errors import CameraNotInitializedError, ConfigurationError
from core.ray import Ray
from core.vector import Color, Point3, Vector3
from geometry.sphere import Sphere
from geometry.world import HittableList
from materials.metal import Metal


class CenteredRandom:
    """Random source stand-in whose jitter and disk samples are all zero."""

    def uniform(self):
        return 0.5

    def in_unit_disk(self):
        return Vector3(0.0, 0.0, 0.0)


def assert_vec(actual, expected, abs=1e-9):
    assert actual.x == pytest.approx(expected.x, abs=abs)
    assert actual.y == pytest.approx(expected.y, abs=abs)
    assert actual.z == pytest.approx(expected.z, abs=abs)


class TestInitialize:
    """Tests for derived camera geometry."""

    def test_default_camera_geometry(self):
        camera = Camera().initialize()
        assert camera.initialized
        assert camera.image_height == 100
        assert camera.pixel_samples_scale == pytest.approx(0.1)
        assert_vec(camera.w, Vector3(0.0, 0.0, 1.0))
        assert_vec(camera.u, Vector3(1.0, 0.0, 0.0))
        assert_vec(camera.v, Vector3(0.0, 1.0, 0.0))
        assert_vec(camera.pixel_delta_u, Vector3(0.2, 0.0, 0.0))
        assert_vec(camera.pixel_delta_v, Vector3(0.0, -0.2, 0.0))
        assert_vec(camera.pixel00_loc, Vector3(-9.9, 9.9, -10.0))
        assert_vec(camera.defocus_disk_u, Vector3(0.0, 0.0, 0.0))

    @pytest.mark.parametrize("width,aspect,height", [
        (400, 16.0 / 9.0, 225),
        (37, 1.0, 37),
        (1, 16.0 / 9.0, 1),
        (100, 3.0, 33),
    ])
    def test_image_height(self, width, aspect, height):
        camera = Camera(image_width=width, aspect_ratio=aspect).initialize()
        assert camera.image_height == height

    def test_basis_is_orthonormal(self):
        camera = Camera(lookfrom=Point3(13.0, 2.0, 3.0), lookat=Point3(0.0, 0.0, 0.0)).initialize()
        for axis in (camera.u, camera.v, camera.w):
            assert axis.length() == pytest.approx(1.0)
        assert camera.u.dot(camera.v) == pytest.approx(0.0, abs=1e-12)
        assert camera.u.dot(camera.w) == pytest.approx(0.0, abs=1e-12)
        assert camera.v.dot(camera.w) == pytest.approx(0.0, abs=1e-12)

    def test_defocus_disk_radius(self):
        camera = Camera(defocus_angle=10.0, focus_dist=3.4).initialize()
        radius = 3.4 * math.tan(math.radians(5.0))
        assert camera.defocus_disk_u.length() == pytest.approx(radius)
        assert camera.defocus_disk_v.length() == pytest.approx(radius)

    @pytest.mark.parametrize("field,value", [
        ("aspect_ratio", 0.0),
        ("image_width", 0),
        ("samples_per_pixel", 0),
        ("max_depth", -1),
        ("vfov", 0.0),
        ("vfov", 180.0),
        ("focus_dist", 0.0),
        ("focus_dist", -2.0),
        ("defocus_angle", -1.0),
    ])
    def test_rejects_invalid_settings(self, field, value):
        camera = Camera()
        setattr(camera, field, value)
        with pytest.raises(ConfigurationError):
            camera.initialize()
        assert not camera.initialized

    def test_rejects_degenerate_view(self):
        with pytest.raises(ConfigurationError):
            Camera(lookfrom=Point3(1.0, 1.0, 1.0), lookat=Point3(1.0, 1.0, 1.0)).initialize()
        with pytest.raises(ConfigurationError):
            Camera(lookfrom=Point3(0.0, 5.0, 0.0), lookat=Point3(0.0, 0.0, 0.0)).initialize()

    def test_requires_initialize(self, rng, empty_world):
        camera = Camera()
        with pytest.raises(CameraNotInitializedError):
            camera.get_ray(0, 0, rng)
        with pytest.raises(CameraNotInitializedError):
            camera.sample_pixel(0, 0, empty_world, rng)


class TestGetRay:
    """Tests for primary ray generation."""

    def test_pinhole_ray_through_pixel_center(self):
        camera = Camera().initialize()
        ray = camera.get_ray(0, 0, CenteredRandom())
        assert ray.origin == camera.center
        assert_vec(ray.direction, camera.pixel00_loc - camera.center)

    def test_jitter_stays_within_pixel(self, rng):
        camera = Camera(image_width=10).initialize()
        center = camera.pixel00_loc + camera.pixel_delta_u * 4 + camera.pixel_delta_v * 7
        half = camera.pixel_delta_u.length() / 2
        for _ in range(200):
            ray = camera.get_ray(4, 7, rng)
            point = ray.origin + ray.direction
            assert abs(point.x - center.x) <= half + 1e-12
            assert abs(point.y - center.y) <= half + 1e-12
            assert point.z == pytest.approx(center.z)

    def test_defocus_origins_lie_on_disk(self, rng):
        camera = Camera(defocus_angle=20.0, focus_dist=4.0).initialize()
        radius = camera.defocus_disk_u.length()
        origins = [camera.get_ray(50, 50, rng).origin for _ in range(300)]
        assert all((o - camera.center).length() < radius for o in origins)
        assert any((o - camera.center).length() > radius / 2 for o in origins)
        assert all((o - camera.center).dot(camera.w) == pytest.approx(0.0, abs=1e-12)
                   for o in origins)


class TestRayColor:
    """Tests for the shading loop."""

    def test_depth_zero_is_black(self, rng, unit_sphere_world, empty_world):
        camera = Camera().initialize()
        ray = Ray(Point3(0.0, 0.0, 5.0), Vector3(0.0, 0.0, -1.0))
        for world in (unit_sphere_world, empty_world):
            assert camera.ray_color(ray, 0, world, rng) == Color(0.0, 0.0, 0.0)

    def test_sky_gradient_endpoints(self, rng, empty_world):
        camera = Camera().initialize()
        down = Ray(Point3(0.0, 0.0, 0.0), Vector3(0.0, -1.0, 0.0))
        up = Ray(Point3(0.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0))
        assert camera.ray_color(down, 5, empty_world, rng) == Color(1.0, 1.0, 1.0)
        assert camera.ray_color(up, 5, empty_world, rng) == SKY_BLUE

    def test_sky_gradient_midpoint(self):
        color = background(Ray(Point3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, -3.0)))
        assert color.x == pytest.approx(0.75)
        assert color.y == pytest.approx(0.85)
        assert color.z == pytest.approx(1.0)

    def test_single_bounce_budget_gives_black_on_hit(self, rng, unit_sphere_world):
        camera = Camera().initialize()
        ray = Ray(Point3(0.0, 0.0, 5.0), Vector3(0.0, 0.0, -1.0))
        assert camera.ray_color(ray, 1, unit_sphere_world, rng) == Color(0.0, 0.0, 0.0)

    def test_mirror_attenuates_sky(self, rng):
        """A perfect mirror facing up reflects the sky tinted by its albedo."""
        albedo = Color(0.5, 0.25, 1.0)
        world = HittableList([Sphere(Point3(0.0, -1000.0, 0.0), 1000.0, Metal(albedo, 0.0))])
        camera = Camera().initialize()
        ray = Ray(Point3(0.0, 1.0, 0.0), Vector3(0.0, -1.0, 0.0))
        color = camera.ray_color(ray, 2, world, rng)
        assert color.x == pytest.approx(0.5 * SKY_BLUE.x)
        assert color.y == pytest.approx(0.25 * SKY_BLUE.y)
        assert color.z == pytest.approx(1.0 * SKY_BLUE.z)

    def test_absorbed_ray_is_black(self):
        class Absorbing:
            def scatter(self, ray_in, rec, rng):
                return None

        world = HittableList([Sphere(Point3(0.0, 0.0, 0.0), 1.0, Absorbing())])
        camera = Camera().initialize()
        ray = Ray(Point3(0.0, 0.0, 5.0), Vector3(0.0, 0.0, -1.0))
        assert camera.ray_color(ray, 10, world, CenteredRandom()) == Color(0.0, 0.0, 0.0)


class TestColorEncoding:
    """Tests for gamma correction and quantization."""

    def test_linear_to_gamma(self):
        assert linear_to_gamma(0.25) == pytest.approx(0.5)
        assert linear_to_gamma(0.0) == 0.0
        assert linear_to_gamma(-1.0) == 0.0

    def test_to_rgb(self):
        assert to_rgb(Color(0.0, 0.0, 0.0)) == (0, 0, 0)
        assert to_rgb(Color(0.25, 0.25, 0.25)) == (128, 128, 128)
        assert to_rgb(Color(1.0, 5.0, 0.9999)) == (255, 255, 255)
        assert to_rgb(Color(-3.0, 0.01, math.nan)) == (0, 25, 0)

    def test_sample_pixel_averages(self, empty_world):
        """With nothing to hit every sample is sky, so the average is too."""
        camera = Camera(samples_per_pixel=4).initialize()
        rgb = camera.sample_pixel(50, 0, empty_world, CenteredRandom())
        ray = camera.get_ray(50, 0, CenteredRandom())
        expected = to_rgb(background(ray))
        assert all(abs(a - b) <= 1 for a, b in zip(rgb, expected))
