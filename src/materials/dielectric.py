# src/materials/dielectric.py
import math
from typing import Tuple
from core.errors import ConfigurationError
from core.random_source import RandomSource
from core.ray import Ray
from core.utils import reflect, refract
from core.vector import Color
from geometry.hittable import HitRecord
from materials.material import Material

WHITE = Color(1.0, 1.0, 1.0)

class Dielectric(Material):
    def __init__(self, refraction_index: float):
        if not refraction_index > 0:
            raise ConfigurationError(
                f"Refraction index must be positive, got {refraction_index}")
        self.refraction_index = float(refraction_index)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: RandomSource) -> Tuple[Ray, Color]:
        # Glass doesn't absorb light
        attenuation = WHITE

        # Entering the medium from outside, or leaving it
        ri = 1.0 / self.refraction_index if rec.front_face else self.refraction_index

        unit_direction = ray_in.direction.normalize()
        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)

        cannot_refract = ri * sin_theta > 1.0
        if cannot_refract or reflectance(cos_theta, ri) > rng.uniform():
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, ri)

        return Ray(rec.p, direction), attenuation

    def __repr__(self) -> str:
        return f"Dielectric({self.refraction_index})"

def reflectance(cos_theta: float, ratio: float) -> float:
    """
    Schlick's approximation of the Fresnel reflectance.
    """
    r0 = (1.0 - ratio) / (1.0 + ratio)
    r0 = r0 * r0
    if r0 == 0.0:
        # Matched indices: there is no interface to reflect from.
        return 0.0
    return r0 + (1.0 - r0) * math.pow((1.0 - cos_theta), 5)
