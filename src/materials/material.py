# materials/material.py
import math
from typing import Optional, Tuple
from core.errors import ConfigurationError
from core.random_source import RandomSource
from core.ray import Ray
from core.vector import Color
from geometry.hittable import HitRecord

class Material:
    """
    Abstract material class. Subclasses must implement scatter().
    Materials are immutable after construction and shared by every primitive
    and every render thread that uses them.
    """
    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: RandomSource) -> Optional[Tuple[Ray, Color]]:
        """
        Computes the scattered ray and attenuation.
        Returns a tuple (scattered_ray, attenuation) or None if the ray is absorbed.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")

def check_albedo(albedo: Color) -> Color:
    """
    Validate that every albedo channel is finite and non-negative.
    """
    for channel in albedo:
        if not (math.isfinite(channel) and channel >= 0.0):
            raise ConfigurationError(f"Albedo channels must be finite and >= 0, got {albedo!r}")
    return albedo
