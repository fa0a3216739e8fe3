# camera/camera.py
import math
from typing import Tuple
from core.errors import CameraNotInitializedError, ConfigurationError
from core.interval import Interval
from core.random_source import RandomSource
from core.vector import Color, Point3, Vector3
from core.ray import Ray
from geometry.hittable import HitRecord, Hittable

# Lower bound for hit queries; keeps a bounced ray from re-hitting its own origin.
SHADOW_ACNE_EPSILON = 0.001

BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)

INTENSITY = Interval(0.0, 0.9999)

class Camera:
    """
    A thin-lens camera. Set the user fields (constructor keywords or plain
    attributes), then call initialize() to derive the viewport geometry.
    Ray generation requires an initialized camera; changing a field afterwards
    requires another initialize().
    """
    def __init__(self,
                 aspect_ratio: float = 1.0,
                 image_width: int = 100,
                 samples_per_pixel: int = 10,
                 max_depth: int = 10,
                 vfov: float = 90.0,
                 lookfrom: Point3 = None,
                 lookat: Point3 = None,
                 vup: Vector3 = None,
                 defocus_angle: float = 0.0,
                 focus_dist: float = 10.0):
        self.aspect_ratio = aspect_ratio            # Ratio of image width over height
        self.image_width = image_width              # Rendered image width in pixels
        self.samples_per_pixel = samples_per_pixel  # Random samples per pixel
        self.max_depth = max_depth                  # Maximum ray bounces into the scene
        self.vfov = vfov                            # Vertical view angle in degrees
        self.lookfrom = lookfrom if lookfrom is not None else Point3(0.0, 0.0, 0.0)
        self.lookat = lookat if lookat is not None else Point3(0.0, 0.0, -1.0)
        self.vup = vup if vup is not None else Vector3(0.0, 1.0, 0.0)
        self.defocus_angle = defocus_angle          # Aperture cone angle in degrees
        self.focus_dist = focus_dist                # Distance to the plane of perfect focus

        self._initialized = False
        self.image_height = 0
        self.pixel_samples_scale = 0.0
        self.center = Point3(0.0, 0.0, 0.0)
        self.pixel00_loc = Point3(0.0, 0.0, 0.0)
        self.pixel_delta_u = Vector3(0.0, 0.0, 0.0)
        self.pixel_delta_v = Vector3(0.0, 0.0, 0.0)
        self.u = self.v = self.w = Vector3(0.0, 0.0, 0.0)
        self.defocus_disk_u = Vector3(0.0, 0.0, 0.0)
        self.defocus_disk_v = Vector3(0.0, 0.0, 0.0)

    @property
    def initialized(self) -> bool:
        return self._initialized

    def validate(self):
        """Reject settings that cannot produce an image."""
        if not self.aspect_ratio > 0:
            raise ConfigurationError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if int(self.image_width) < 1:
            raise ConfigurationError(f"image_width must be at least 1, got {self.image_width}")
        if int(self.samples_per_pixel) < 1:
            raise ConfigurationError(
                f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}")
        if int(self.max_depth) < 0:
            raise ConfigurationError(f"max_depth must be non-negative, got {self.max_depth}")
        if not 0.0 < self.vfov < 180.0:
            raise ConfigurationError(f"vfov must be in (0, 180) degrees, got {self.vfov}")
        if not self.focus_dist > 0:
            raise ConfigurationError(f"focus_dist must be positive, got {self.focus_dist}")
        if not self.defocus_angle >= 0:
            raise ConfigurationError(
                f"defocus_angle must be non-negative, got {self.defocus_angle}")
        if self.lookfrom == self.lookat:
            raise ConfigurationError("lookfrom and lookat must be different points")
        if self.vup.cross((self.lookfrom - self.lookat).normalize()).near_zero():
            raise ConfigurationError("vup must not be parallel to the view direction")

    def initialize(self) -> "Camera":
        """Validates the user fields and computes the derived viewport geometry."""
        self.validate()
        self.image_width = int(self.image_width)
        self.samples_per_pixel = int(self.samples_per_pixel)
        self.max_depth = int(self.max_depth)
        self.image_height = max(1, int(self.image_width / self.aspect_ratio))

        self.pixel_samples_scale = 1.0 / self.samples_per_pixel
        self.center = self.lookfrom

        # Viewport dimensions at the focus plane
        h = math.tan(math.radians(self.vfov) / 2)
        viewport_height = 2.0 * h * self.focus_dist
        viewport_width = viewport_height * (self.image_width / self.image_height)

        # Camera basis vectors
        self.w = (self.lookfrom - self.lookat).normalize()
        self.u = self.vup.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        # Vectors along the viewport edges; v is flipped to scan top to bottom
        viewport_u = self.u * viewport_width
        viewport_v = -self.v * viewport_height

        self.pixel_delta_u = viewport_u / self.image_width
        self.pixel_delta_v = viewport_v / self.image_height

        viewport_upper_left = (self.center
                               - self.w * self.focus_dist
                               - (viewport_u + viewport_v) * 0.5)
        self.pixel00_loc = viewport_upper_left + (self.pixel_delta_u + self.pixel_delta_v) * 0.5

        defocus_radius = self.focus_dist * math.tan(math.radians(self.defocus_angle / 2))
        self.defocus_disk_u = self.u * defocus_radius
        self.defocus_disk_v = self.v * defocus_radius

        self._initialized = True
        return self

    def require_initialized(self):
        if not self._initialized:
            raise CameraNotInitializedError("Camera.initialize() must be called before rendering")

    def get_ray(self, i: int, j: int, rng: RandomSource) -> Ray:
        """
        Builds a ray from the defocus disk through a random point inside
        pixel (i, j), where i is the column and j the row from the top.
        """
        self.require_initialized()
        offset_x = rng.uniform() - 0.5
        offset_y = rng.uniform() - 0.5
        pixel_sample = (self.pixel00_loc
                        + self.pixel_delta_u * (i + offset_x)
                        + self.pixel_delta_v * (j + offset_y))

        ray_origin = self.center if self.defocus_angle <= 0 else self.defocus_disk_sample(rng)
        return Ray(ray_origin, pixel_sample - ray_origin)

    def defocus_disk_sample(self, rng: RandomSource) -> Point3:
        p = rng.in_unit_disk()
        return self.center + self.defocus_disk_u * p.x + self.defocus_disk_v * p.y

    def ray_color(self, ray: Ray, depth: int, world: Hittable, rng: RandomSource) -> Color:
        """
        Traces a ray through the world and returns its linear radiance.

        Each bounce multiplies the running attenuation by the material's; the
        loop ends at the sky, on absorption, or when the bounce budget runs
        out, which counts as no light gathered.
        """
        attenuation = WHITE
        rec = HitRecord()
        ray_t = Interval(SHADOW_ACNE_EPSILON, math.inf)
        while depth > 0:
            if not world.hit(ray, ray_t, rec):
                return attenuation * background(ray)
            scattered = rec.material.scatter(ray, rec, rng)
            if scattered is None:
                return BLACK
            ray, bounce_attenuation = scattered
            attenuation = attenuation * bounce_attenuation
            depth -= 1
        return BLACK

    def sample_pixel(self, i: int, j: int, world: Hittable, rng: RandomSource) -> Tuple[int, int, int]:
        """Averages samples_per_pixel traced rays and quantizes the result."""
        self.require_initialized()
        pixel_color = Color(0.0, 0.0, 0.0)
        for _ in range(self.samples_per_pixel):
            ray = self.get_ray(i, j, rng)
            pixel_color = pixel_color + self.ray_color(ray, self.max_depth, world, rng)
        return to_rgb(pixel_color * self.pixel_samples_scale)

def background(ray: Ray) -> Color:
    """Vertical white to sky-blue gradient."""
    unit_direction = ray.direction.normalize()
    alpha = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - alpha) + SKY_BLUE * alpha

def linear_to_gamma(linear_component: float) -> float:
    if linear_component > 0:
        return math.sqrt(linear_component)
    return 0.0

def to_rgb(color: Color) -> Tuple[int, int, int]:
    """Gamma-2 encodes a linear color into 8-bit channels."""
    return (
        int(256 * linear_to_gamma(INTENSITY.clamp(color.x))),
        int(256 * linear_to_gamma(INTENSITY.clamp(color.y))),
        int(256 * linear_to_gamma(INTENSITY.clamp(color.z))),
    )
