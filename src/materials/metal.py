# materials/metal.py
from typing import Optional, Tuple
from core.random_source import RandomSource
from core.ray import Ray
from core.utils import reflect
from core.vector import Color
from geometry.hittable import HitRecord
from materials.material import Material, check_albedo

class Metal(Material):
    """
    Metal material with mirror reflection blurred by a fuzz factor in [0, 1].
    """
    def __init__(self, albedo: Color, fuzz: float = 0.0):
        self.albedo = check_albedo(albedo)
        self.fuzz = min(max(float(fuzz), 0.0), 1.0)

    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: RandomSource) -> Optional[Tuple[Ray, Color]]:
        reflected = reflect(ray_in.direction, rec.normal).normalize()
        direction = reflected + rng.unit_vector() * self.fuzz

        if direction.dot(rec.normal) <= 0:
            return None  # Fuzz pushed the reflection below the surface

        return Ray(rec.p, direction), self.albedo

    def __repr__(self) -> str:
        return f"Metal({self.albedo!r}, fuzz={self.fuzz})"
