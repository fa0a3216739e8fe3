# geometry/hittable.py
from core.interval import Interval
from core.vector import Point3, Vector3
from core.ray import Ray

class HitRecord:
    """
    Records details of a ray-object intersection. A single record is reused
    for one scene query and overwritten each time a closer hit is found.
    """
    __slots__ = ("p", "normal", "t", "front_face", "material")

    def __init__(self, p: Point3 = None, normal: Vector3 = None,
                 t: float = 0.0, front_face: bool = False, material=None):
        self.p = p                    # Intersection point
        self.normal = normal          # Unit normal, always facing against the ray
        self.t = t                    # Ray parameter at intersection
        self.front_face = front_face  # Whether the ray hit from outside
        self.material = material

    def set_face_normal(self, ray: Ray, outward_normal: Vector3):
        """
        Ensures that the normal always points against the ray.
        outward_normal is assumed to have unit length.
        """
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal

class Hittable:
    """
    Abstract class for objects that can be hit by a ray.
    """
    def hit(self, ray: Ray, ray_t: Interval, rec: HitRecord) -> bool:
        """
        Fill rec and return True if the ray hits the object at some t strictly
        inside ray_t. rec is left untouched on a miss.
        """
        raise NotImplementedError("hit() must be implemented by subclasses.")
