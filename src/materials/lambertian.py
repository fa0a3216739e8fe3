# materials/lambertian.py
from typing import Tuple
from core.random_source import RandomSource
from core.ray import Ray
from core.vector import Color
from geometry.hittable import HitRecord
from materials.material import Material, check_albedo

class Lambertian(Material):
    """
    Lambertian diffuse material.
    """

    def __init__(self, albedo: Color):
        self.albedo = check_albedo(albedo)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: RandomSource) -> Tuple[Ray, Color]:
        """
        Scatter a ray according to a Lambertian reflection model.
        Returns (scattered_ray, attenuation); diffuse surfaces never absorb.
        """
        # Normal plus a random unit vector gives a cosine-weighted direction.
        scatter_direction = rec.normal + rng.unit_vector()

        # The two can cancel out; a zero direction would break later math.
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        return Ray(rec.p, scatter_direction), self.albedo

    def __repr__(self) -> str:
        return f"Lambertian({self.albedo!r})"
